import hashlib
import hmac
import unittest
from unittest import mock

from verifier.tokens import WINDOW_SECONDS, sign_token, time_window, verify_token

SECRET = "test-secret"
# 2026-01-01T00:00:00Z, the first second of an hour window
T0 = 1767225600


def expected_token(order_id, secret, now):
    payload = f"{order_id}:{int(now // 3600)}".encode()
    return hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()


class TestTimeWindow(unittest.TestCase):
    def test_floors_to_the_hour(self):
        self.assertEqual(time_window(T0), T0 // 3600)
        self.assertEqual(time_window(T0 + 3599.9), T0 // 3600)
        self.assertEqual(time_window(T0 + 3600), T0 // 3600 + 1)

    def test_defaults_to_current_time(self):
        with mock.patch("verifier.tokens.time.time", return_value=T0 + 10):
            self.assertEqual(time_window(), T0 // 3600)


class TestSignToken(unittest.TestCase):
    def test_matches_hmac_of_order_and_window(self):
        token = sign_token("1001", SECRET, T0 + 42)
        self.assertEqual(token, expected_token("1001", SECRET, T0 + 42))
        self.assertRegex(token, r"^[0-9a-f]{64}$")

    def test_stable_within_window(self):
        self.assertEqual(sign_token("1001", SECRET, T0), sign_token("1001", SECRET, T0 + WINDOW_SECONDS - 1))

    def test_changes_in_next_window(self):
        self.assertNotEqual(sign_token("1001", SECRET, T0), sign_token("1001", SECRET, T0 + WINDOW_SECONDS))

    def test_depends_on_order_and_secret(self):
        base = sign_token("1001", SECRET, T0)
        self.assertNotEqual(base, sign_token("1002", SECRET, T0))
        self.assertNotEqual(base, sign_token("1001", "other-secret", T0))


class TestVerifyToken(unittest.TestCase):
    def test_accepts_token_from_same_window(self):
        token = sign_token("1001", SECRET, T0 + 5)
        self.assertTrue(verify_token("1001", token, SECRET, T0 + 3000))

    def test_accepts_uppercase_hex(self):
        token = sign_token("1001", SECRET, T0)
        self.assertTrue(verify_token("1001", token.upper(), SECRET, T0))

    def test_rejects_token_from_previous_window(self):
        token = sign_token("1001", SECRET, T0 - 1)
        self.assertFalse(verify_token("1001", token, SECRET, T0))

    def test_rejects_wrong_order_or_secret(self):
        token = sign_token("1001", SECRET, T0)
        self.assertFalse(verify_token("1002", token, SECRET, T0))
        self.assertFalse(verify_token("1001", token, "other-secret", T0))
        self.assertFalse(verify_token("1001", "not-a-token", SECRET, T0))

    def test_rejects_non_ascii_token(self):
        for token in ("tökén", "\u00e9" * 64, sign_token("1001", SECRET, T0)[:-1] + "\u00df"):
            with self.subTest(token=token):
                self.assertFalse(verify_token("1001", token, SECRET, T0))


if __name__ == "__main__":
    unittest.main()
