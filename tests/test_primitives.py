import string
import unittest
from datetime import datetime, timedelta, timezone

from freezegun import freeze_time

from iotsig.digest import hash, hmac, join
from iotsig.encoding import encode, encode_query
from iotsig.errors import EncodingError, SigningError
from iotsig.timestamp import Timestamp, capture_now


class TestEncode(unittest.TestCase):
    def test_unreserved_is_identity(self) -> None:
        unreserved = string.ascii_letters + string.digits + '-._~'
        self.assertEqual(encode(unreserved), unreserved)

    def test_space_is_percent_twenty(self) -> None:
        self.assertEqual(encode('a b'), 'a%20b')
        self.assertNotIn('+', encode('a b'))

    def test_reserved_uses_uppercase_hex(self) -> None:
        self.assertEqual(encode('/:=&+?#%'), '%2F%3A%3D%26%2B%3F%23%25')
        self.assertEqual(encode('AKIA/20150830/us-east-1/iotdata/aws4_request'),
                         'AKIA%2F20150830%2Fus-east-1%2Fiotdata%2Faws4_request')

    def test_encoded_output_is_re_encoded_not_trusted(self) -> None:
        once = encode('a/b')
        self.assertEqual(once, 'a%2Fb')
        self.assertEqual(encode(once), 'a%252Fb')

    def test_multibyte_characters_encode_per_byte(self) -> None:
        self.assertEqual(encode('é'), '%C3%A9')
        self.assertEqual(encode('温度'), '%E6%B8%A9%E5%BA%A6')

    def test_bytes_input(self) -> None:
        self.assertEqual(encode(b'a b'), 'a%20b')

    def test_invalid_utf8_bytes(self) -> None:
        with self.assertRaises(EncodingError):
            encode(b'\xff\xfe')

    def test_lone_surrogate(self) -> None:
        with self.assertRaises(SigningError):
            encode('\ud800')

    def test_encode_query_keeps_order(self) -> None:
        self.assertEqual(encode_query([('z', '1'), ('a', 'x y')]), 'z=1&a=x%20y')
        self.assertEqual(encode_query([]), '')


class TestDigest(unittest.TestCase):
    def test_hash_empty(self) -> None:
        self.assertEqual(hash(b''), 'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855')

    def test_hash_accepts_text(self) -> None:
        self.assertEqual(hash('hello'), hash(b'hello'))
        self.assertEqual(hash('hello'), '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824')

    def test_hmac_returns_raw_digest(self) -> None:
        # RFC 4231 test case 2
        digest = hmac(b'Jefe', 'what do ya want for nothing?')
        self.assertIsInstance(digest, bytes)
        self.assertEqual(len(digest), 32)
        self.assertEqual(digest.hex(), '5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843')

    def test_join_sorts(self) -> None:
        self.assertEqual(join(['x-amz-date', 'host', 'content-type'], ';'), 'content-type;host;x-amz-date')

    def test_join_sorts_by_key(self) -> None:
        lines = ['x-amz-date:1', 'x-amz:2']
        self.assertEqual(join(lines, '\n', key=lambda line: line.partition(':')[0]), 'x-amz:2\nx-amz-date:1')

    def test_join_empty(self) -> None:
        self.assertEqual(join([], '&'), '')


class TestTimestamp(unittest.TestCase):
    def test_stamps(self) -> None:
        ts = Timestamp(datetime(2015, 8, 30, 12, 36, 0, tzinfo=timezone.utc))

        self.assertEqual(ts.date_stamp(), '20150830')
        self.assertEqual(ts.full_stamp(), '20150830T123600Z')
        self.assertEqual(str(ts), '20150830T123600Z')

    def test_truncated_to_seconds(self) -> None:
        ts = Timestamp(datetime(2015, 8, 30, 12, 36, 0, 999999, tzinfo=timezone.utc))

        self.assertEqual(ts.instant.microsecond, 0)
        self.assertEqual(ts, Timestamp.parse('20150830T123600Z'))

    def test_converted_to_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        ts = Timestamp(datetime(2015, 8, 31, 1, 0, 0, tzinfo=plus_two))

        self.assertEqual(ts.full_stamp(), '20150830T230000Z')
        self.assertEqual(ts.date_stamp(), '20150830')

    def test_naive_datetime_treated_as_utc(self) -> None:
        self.assertEqual(Timestamp(datetime(2015, 8, 30, 12, 36)).full_stamp(), '20150830T123600Z')

    def test_parse_rejects_malformed(self) -> None:
        with self.assertRaises(SigningError):
            Timestamp.parse('2015-08-30 12:36:00')

    @freeze_time('2023-12-15 23:59:59')
    def test_capture_now_is_stable(self) -> None:
        ts = capture_now()

        self.assertEqual(ts.full_stamp(), '20231215T235959Z')
        self.assertEqual(ts.date_stamp(), '20231215')
        self.assertEqual(ts.full_stamp(), ts.full_stamp())

    def test_both_forms_from_one_instant(self) -> None:
        with freeze_time('2023-12-15 23:59:59') as frozen:
            ts = capture_now()
            frozen.tick(timedelta(seconds=2))
            self.assertEqual(ts.date_stamp(), '20231215')
            self.assertEqual(ts.full_stamp(), '20231215T235959Z')
            self.assertEqual(capture_now().date_stamp(), '20231216')


if __name__ == '__main__':
    unittest.main(verbosity=2)
