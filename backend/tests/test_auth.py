import sqlite3

from conftest import login, signup


def _count(db_path, table):
    with sqlite3.connect(db_path) as conn:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


def test_signup_sets_session_cookie(client):
    response = signup(client)

    user = response.json()["user"]
    assert user["email"] == "ada@example.com"
    assert user["firstName"] == "Ada"
    assert user["jobTitle"] is None
    assert "passwordHash" not in user

    cookie = response.headers["set-cookie"]
    assert "session_token=" in cookie
    assert "HttpOnly" in cookie
    assert "samesite=lax" in cookie.lower()
    assert "Secure" not in cookie

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["id"] == user["id"]


def test_signup_then_login_returns_same_user(client):
    created = signup(client).json()["user"]
    logged_in = login(client).json()["user"]
    assert logged_in["id"] == created["id"]


def test_login_keeps_other_sessions(client, db_path):
    signup(client)
    login(client)
    assert _count(db_path, "user_sessions") == 2


def test_duplicate_email_any_case_rejected(client, db_path):
    signup(client)
    response = client.post("/api/auth/signup", json={
        "email": "ADA@Example.com",
        "password": "another-password",
        "firstName": "Ada",
        "lastName": "Byron",
    })
    assert response.status_code == 400
    assert response.json() == {"error": "Email is already registered"}
    assert _count(db_path, "users") == 1


def test_signup_validation_errors_are_400(client):
    response = client.post("/api/auth/signup", json={
        "email": "not-an-email",
        "password": "short",
        "firstName": "",
        "lastName": "X",
    })
    assert response.status_code == 400
    assert "error" in response.json()


def test_login_does_not_reveal_which_field_was_wrong(client):
    signup(client)
    client.cookies.clear()

    wrong_password = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "bob@example.com", "password": "nope"})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid email or password"}


def test_login_email_is_case_insensitive(client):
    signup(client)
    client.cookies.clear()
    response = client.post("/api/auth/login", json={"email": "Ada@EXAMPLE.com", "password": "correct-horse"})
    assert response.status_code == 200


def test_me_requires_cookie(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}


def test_unknown_token_is_rejected(client):
    response = client.get("/api/auth/me", headers={"Cookie": "session_token=not-a-real-token"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid session"}


def test_expired_session_is_rejected_and_removed(client, db_path):
    signup(client)
    with sqlite3.connect(db_path) as conn:
        conn.execute("UPDATE user_sessions SET expires_at = '2000-01-01 00:00:00.000000'")

    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid session"}
    assert _count(db_path, "user_sessions") == 0


def test_logout_invalidates_session(client, db_path):
    response = signup(client)
    token = response.cookies["session_token"]

    logout = client.post("/api/auth/logout")
    assert logout.status_code == 200
    assert logout.json() == {"success": True}
    assert _count(db_path, "user_sessions") == 0

    again = client.get("/api/auth/me", headers={"Cookie": f"session_token={token}"})
    assert again.status_code == 401


def test_update_profile(auth_client):
    response = auth_client.put("/api/auth/profile", json={
        "firstName": "  Augusta ",
        "lastName": "King",
        "jobTitle": "Analyst",
        "location": "",
        "bio": "Wrote the first program.",
    })
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["firstName"] == "Augusta"
    assert user["jobTitle"] == "Analyst"
    assert user["location"] is None
    assert user["bio"] == "Wrote the first program."


def test_update_profile_rejects_long_bio(auth_client):
    response = auth_client.put("/api/auth/profile", json={
        "firstName": "Ada",
        "lastName": "Lovelace",
        "bio": "x" * 1001,
    })
    assert response.status_code == 400


def test_update_password(auth_client):
    wrong = auth_client.put("/api/auth/password", json={
        "currentPassword": "not-it",
        "newPassword": "brand-new-password",
    })
    assert wrong.status_code == 400
    assert wrong.json() == {"error": "Current password is incorrect"}

    ok = auth_client.put("/api/auth/password", json={
        "currentPassword": "correct-horse",
        "newPassword": "brand-new-password",
    })
    assert ok.status_code == 200

    login(auth_client, password="brand-new-password")
