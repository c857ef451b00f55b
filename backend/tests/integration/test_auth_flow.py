"""
Integration tests for sign-up, sign-in and sign-out through the Flask client.
"""

import pytest
from sqlalchemy import select

from fincontrol.db.base import User as DbUser
from tests.conftest import TEST_USER_EMAIL, TEST_USER_PASSWORD


@pytest.mark.auth
class TestLogin:
    def test_login_page_renders(self, client):
        response = client.get("/login")

        assert response.status_code == 200
        assert "Log in" in response.get_data(as_text=True)

    def test_correct_credentials_start_a_session(self, client, staff_user):
        response = client.post(
            "/login", data={"email": TEST_USER_EMAIL, "password": TEST_USER_PASSWORD}
        )

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/dashboard/invoices")
        assert client.get("/dashboard/invoices").status_code == 200

    def test_wrong_password_shows_invalid_credentials(self, client, staff_user):
        response = client.post(
            "/login", data={"email": TEST_USER_EMAIL, "password": "wrong-password"}
        )

        assert response.status_code == 200
        assert "Invalid credentials" in response.get_data(as_text=True)

    def test_unknown_email_shows_invalid_credentials(self, client):
        response = client.post(
            "/login", data={"email": "ghost@example.com", "password": TEST_USER_PASSWORD}
        )

        assert "Invalid credentials" in response.get_data(as_text=True)

    def test_next_parameter_is_honoured_for_local_paths(self, client, staff_user):
        response = client.post(
            "/login?next=/dashboard/customers",
            data={"email": TEST_USER_EMAIL, "password": TEST_USER_PASSWORD},
        )

        assert response.headers["Location"].endswith("/dashboard/customers")

    @pytest.mark.parametrize(
        "target",
        ["//evil.example.com", "/\\evil.example.com", "https://evil.example.com", "evil"],
    )
    def test_next_parameter_ignores_external_urls(self, client, staff_user, target):
        response = client.post(
            "/login",
            query_string={"next": target},
            data={"email": TEST_USER_EMAIL, "password": TEST_USER_PASSWORD},
        )

        assert response.headers["Location"].endswith("/dashboard/invoices")

    def test_authenticated_user_is_sent_to_dashboard(self, auth_client):
        response = auth_client.get("/login")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/dashboard/invoices")


@pytest.mark.auth
class TestProtectedRoutes:
    @pytest.mark.parametrize(
        "path",
        [
            "/dashboard/invoices",
            "/dashboard/invoices/create",
            "/dashboard/customers",
            "/dashboard/customers/create",
        ],
    )
    def test_anonymous_user_redirected_to_login(self, client, path):
        response = client.get(path)

        assert response.status_code == 302
        assert "/login" in response.headers["Location"]

    def test_logout_ends_the_session(self, auth_client):
        response = auth_client.post("/logout")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")
        assert auth_client.get("/dashboard/invoices").status_code == 302


@pytest.mark.user
class TestSignup:
    def test_signup_creates_hashed_user_and_redirects(self, client, db_session):
        response = client.post(
            "/signup",
            data={"name": "New Staff", "email": "new@example.com", "password": "secret1"},
        )

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")
        db_user = db_session.scalars(
            select(DbUser).where(DbUser.email == "new@example.com")
        ).one()
        assert db_user.password != "secret1"

        login = client.post("/login", data={"email": "new@example.com", "password": "secret1"})
        assert login.status_code == 302

    def test_signup_validation_errors_render_inline(self, client):
        response = client.post("/signup", data={"name": "", "email": "", "password": "1"})

        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert "Missing Fields. Failed to Sign up" in body
        assert "This field has to be filled." in body
        assert "This is not a valid email." in body
        assert "String must contain at least 6 character(s)" in body

    def test_duplicate_email_keeps_existing_hash(self, client, db_session, staff_user):
        original_hash = db_session.scalars(
            select(DbUser.password).where(DbUser.email == TEST_USER_EMAIL)
        ).one()

        response = client.post(
            "/signup",
            data={"name": "Impostor", "email": TEST_USER_EMAIL, "password": "another1"},
        )

        assert "Email is already in use." in response.get_data(as_text=True)
        db_session.expire_all()
        assert db_session.scalars(
            select(DbUser.password).where(DbUser.email == TEST_USER_EMAIL)
        ).one() == original_hash
