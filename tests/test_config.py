"""Settings validation: bounds, normalisation and the production secret guard."""

import unittest

from pydantic import ValidationError

from app.core.config import DEFAULT_JWT_SECRET, Settings


def _settings(**kwargs: object) -> Settings:
    """Build Settings without reading a local .env file."""
    return Settings(_env_file=None, **kwargs)


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings()
        self.assertEqual(s.API_PREFIX, "/api")
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertEqual(s.BCRYPT_ROUNDS, 12)

    def test_rejects_non_postgres_url(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://root@localhost/accounts")

    def test_algorithm_normalised_and_restricted(self) -> None:
        self.assertEqual(_settings(JWT_ALGORITHM=" hs512 ").JWT_ALGORITHM, "HS512")
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="none")

    def test_expire_minutes_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=43201)

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=3)
        self.assertEqual(_settings(BCRYPT_ROUNDS=4).BCRYPT_ROUNDS, 4)

    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_default_secret_rejected_in_prod(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", JWT_SECRET=DEFAULT_JWT_SECRET)
        s = _settings(APP_ENV="prod", JWT_SECRET="a-real-secret-for-production-use-only")
        self.assertEqual(s.APP_ENV, "prod")

    def test_api_prefix_normalised(self) -> None:
        self.assertEqual(_settings(API_PREFIX="/api/").API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            _settings(API_PREFIX="api")

    def test_cors_origins_split(self) -> None:
        s = _settings(CORS_ORIGINS="http://a.test, http://b.test ,,")
        self.assertEqual(s.cors_origins, ["http://a.test", "http://b.test"])


if __name__ == "__main__":
    unittest.main()
