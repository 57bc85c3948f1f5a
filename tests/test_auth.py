"""
Sign up / sign in / sign out tests
"""

from conftest import DEFAULT_PASSWORD, page_text


def sign_up_form(**overrides):
    fields = {
        "nickname": "furima太郎",
        "email": "taro@example.com",
        "password": "abc123",
        "password_confirmation": "abc123",
    }
    fields.update(overrides)
    return {f"user[{name}]": value for name, value in fields.items()}


class TestSignUp:
    def test_sign_up_page_renders(self, client):
        response = client.get("/users/sign_up")

        assert response.status_code == 200
        assert "会員情報入力" in page_text(response)

    def test_valid_sign_up_creates_member_and_signs_in(self, client, db):
        response = client.post("/users", data=sign_up_form(), follow_redirects=True)
        page = page_text(response)

        assert response.request.path == "/"
        assert "Welcome! You have signed up successfully." in page
        assert "furima太郎" in page
        assert "ログアウト" in page

        user = db.get_user_by_email("taro@example.com")
        assert user["password_hash"] != "abc123"

    def test_email_is_stored_lowercase(self, client, db):
        client.post("/users", data=sign_up_form(email="Taro@Example.COM"))

        assert db.users[1]["email"] == "taro@example.com"

    def test_invalid_sign_up_shows_errors(self, client, db):
        response = client.post(
            "/users",
            data=sign_up_form(nickname="", email="not-an-email", password="abcdef",
                              password_confirmation="abcdef"),
        )
        page = page_text(response)

        assert response.status_code == 422
        assert 'class="error-alert"' in page
        assert "Nickname can't be blank" in page
        assert "Email is invalid" in page
        assert "Password is invalid. Include both letters and numbers" in page
        assert not db.users

    def test_mismatched_confirmation_is_rejected(self, client, db):
        response = client.post(
            "/users", data=sign_up_form(password_confirmation="abc124")
        )

        assert response.status_code == 422
        assert "Password confirmation doesn't match Password" in page_text(response)
        assert not db.users

    def test_short_password_is_rejected(self, client):
        response = client.post(
            "/users", data=sign_up_form(password="ab1", password_confirmation="ab1")
        )

        assert "Password is too short (minimum is 6 characters)" in page_text(response)

    def test_duplicate_email_is_rejected(self, client, db, make_user):
        make_user(email="taro@example.com")

        response = client.post("/users", data=sign_up_form())
        page = page_text(response)

        assert response.status_code == 422
        assert "Email has already been taken" in page
        assert 'value="furima太郎"' in page
        assert len(db.users) == 1


class TestSignIn:
    def test_valid_sign_in(self, client, make_user, login):
        user = make_user(nickname="hanako")

        response = login(user)
        page = page_text(response)

        assert response.request.path == "/"
        assert "Signed in successfully." in page
        assert "hanako" in page

    def test_sign_in_records_last_login(self, db, make_user, login):
        user = make_user()

        login(user)

        assert db.users[user["id"]]["last_login"] is not None

    def test_wrong_password_is_rejected(self, client, make_user, login):
        user = make_user()

        response = login(user, password="wrong1")
        page = page_text(response)

        assert response.status_code == 401
        assert "Invalid Email or password." in page
        assert f'value="{user["email"]}"' in page

    def test_unknown_email_is_rejected(self, client):
        response = client.post(
            "/users/sign_in",
            data={"user[email]": "nobody@example.com", "user[password]": DEFAULT_PASSWORD},
        )

        assert response.status_code == 401
        assert "Invalid Email or password." in page_text(response)

    def test_offsite_next_is_ignored(self, client, make_user, login):
        user = make_user()

        response = login(user, follow_redirects=False, next_url="https://evil.example.com/")

        assert response.status_code == 302
        assert response.headers["Location"] == "/"

    def test_signed_in_member_is_sent_home(self, client, make_user, login):
        login(make_user())

        response = client.get("/users/sign_in", follow_redirects=True)

        assert response.request.path == "/"
        assert "You are already signed in." in page_text(response)


class TestSignOut:
    def test_sign_out(self, client, make_user, login):
        login(make_user(nickname="hanako"))

        response = client.get("/users/sign_out", follow_redirects=True)
        page = page_text(response)

        assert "Signed out successfully." in page
        assert "ログイン" in page
        assert "hanako" not in page

    def test_sign_out_requires_sign_in(self, client):
        response = client.get("/users/sign_out")

        assert response.status_code == 302
        assert "/users/sign_in" in response.headers["Location"]
