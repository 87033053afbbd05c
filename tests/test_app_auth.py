import json
import os
import tempfile
import unittest
from datetime import datetime, timezone

import httpx
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwt

from fairsoft_metadata.config import GithubAppConfig
from fairsoft_metadata.services.github.app_auth import (
    JWT_CLOCK_SKEW,
    JWT_LIFETIME,
    GithubAppAuth,
)
from fairsoft_metadata.services.github.exceptions import (
    GithubConfigurationError,
    GithubNotFoundError,
)

API_URL = "https://api.github.test"


def generate_key_pair():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")
    return private_pem, public_pem


class AppAuthTestCase(unittest.IsolatedAsyncioTestCase):
    @classmethod
    def setUpClass(cls):
        cls.private_pem, cls.public_pem = generate_key_pair()

    def setUp(self):
        handle, self.key_path = tempfile.mkstemp(suffix=".pem")
        with os.fdopen(handle, "w") as key_file:
            key_file.write(self.private_pem)
        self.config = GithubAppConfig(app_id="12345", private_key_path=self.key_path)

    def tearDown(self):
        os.remove(self.key_path)


class TestCreateJwt(AppAuthTestCase):
    async def test_signed_with_app_key(self):
        now = datetime.now(timezone.utc)
        token = GithubAppAuth(self.config).create_jwt(now)

        claims = jwt.decode(token, self.public_pem, algorithms=["RS256"])

        self.assertEqual(claims["iss"], "12345")
        self.assertEqual(claims["iat"], int((now - JWT_CLOCK_SKEW).timestamp()))
        self.assertEqual(claims["exp"], int((now + JWT_LIFETIME).timestamp()))
        self.assertEqual(jwt.get_unverified_header(token)["alg"], "RS256")

    async def test_unconfigured_app(self):
        auth = GithubAppAuth(GithubAppConfig(app_id=None, private_key_path=None))
        with self.assertRaises(GithubConfigurationError):
            auth.create_jwt()

    async def test_unreadable_key(self):
        auth = GithubAppAuth(GithubAppConfig(app_id="1", private_key_path="/nonexistent/key.pem"))
        with self.assertRaises(GithubConfigurationError):
            auth.create_jwt()


class TestInstallations(AppAuthTestCase):
    async def test_installation_token_and_client(self):
        requests = []

        def handler(request):
            requests.append(request)
            if request.url.path == "/app/installations/42/access_tokens":
                return httpx.Response(201, json={"token": "ghs_installation"})
            return httpx.Response(200, json={"name": "main", "commit": {"sha": "abc"}})

        auth = GithubAppAuth(self.config, api_url=API_URL, transport=httpx.MockTransport(handler))

        client = await auth.installation_client(42)
        async with client:
            await client.get_branch("octo", "hello", "main")

        token_request, branch_request = requests
        self.assertEqual(token_request.method, "POST")
        app_token = token_request.headers["Authorization"].split(" ", 1)[1]
        self.assertEqual(jwt.get_unverified_claims(app_token)["iss"], "12345")
        self.assertEqual(branch_request.headers["Authorization"], "Bearer ghs_installation")

    async def test_repo_installation(self):
        def handler(request):
            self.assertEqual(request.url.path, "/repos/octo/hello/installation")
            return httpx.Response(200, json={"id": 99, "app_id": 12345})

        auth = GithubAppAuth(self.config, api_url=API_URL, transport=httpx.MockTransport(handler))

        installation = await auth.get_repo_installation("octo", "hello")

        self.assertEqual(installation["id"], 99)

    async def test_app_not_installed(self):
        def handler(request):
            return httpx.Response(404, content=json.dumps({"message": "Not Found"}))

        auth = GithubAppAuth(self.config, api_url=API_URL, transport=httpx.MockTransport(handler))

        with self.assertRaises(GithubNotFoundError):
            await auth.get_repo_installation("octo", "private")


if __name__ == "__main__":
    unittest.main()
