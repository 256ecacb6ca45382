"""
Integration tests for the self-service user endpoints
"""

from conftest import register


class TestReadUser:

    def test_current_user(self, client, account, auth_headers):
        r = client.get("/api/users", headers=auth_headers)
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["email"] == "ravi@mailbox.in"
        assert "password_hash" not in data

    def test_by_own_id(self, client, account, auth_headers):
        r = client.get(f"/api/users/{account['user']['id']}", headers=auth_headers)
        assert r.status_code == 200
        assert r.json()["data"]["name"] == "Ravi Kumar"

    def test_other_user_forbidden(self, client, account, other_headers):
        r = client.get(f"/api/users/{account['user']['id']}", headers=other_headers)
        assert r.status_code == 403
        assert r.json()["error"] == "Access denied"


class TestUpdateUser:

    def test_partial_update(self, client, account, auth_headers):
        user_id = account["user"]["id"]
        r = client.put(f"/api/users/{user_id}", json={"name": "Ravi K", "address": "Pune"}, headers=auth_headers)
        assert r.status_code == 200
        body = r.json()
        assert body["message"] == "User updated successfully"
        assert body["data"]["name"] == "Ravi K"
        assert body["data"]["address"] == "Pune"
        assert body["data"]["phone"] == "+919876543210"

    def test_password_change_allows_new_login(self, client, account, auth_headers):
        user_id = account["user"]["id"]
        r = client.put(f"/api/users/{user_id}", json={"password": "new-secret"}, headers=auth_headers)
        assert r.status_code == 200

        old = client.post("/api/auth/login", json={"email": "ravi@mailbox.in", "password": "secret123"})
        assert old.status_code == 401
        new = client.post("/api/auth/login", json={"email": "ravi@mailbox.in", "password": "new-secret"})
        assert new.status_code == 200

    def test_blank_name_rejected(self, client, account, auth_headers):
        r = client.put(f"/api/users/{account['user']['id']}", json={"name": "   "}, headers=auth_headers)
        assert r.status_code == 400
        assert r.json()["details"] == [{"field": "name", "message": "Field 'name' cannot be empty"}]

    def test_email_taken_by_other_user(self, client, account, auth_headers, other_headers):
        r = client.put(f"/api/users/{account['user']['id']}", json={"email": "meera@mailbox.in"}, headers=auth_headers)
        assert r.status_code == 400
        assert r.json()["error"] == "Email already exists"

    def test_keeping_own_email_is_fine(self, client, account, auth_headers):
        r = client.put(f"/api/users/{account['user']['id']}", json={"email": "ravi@mailbox.in"}, headers=auth_headers)
        assert r.status_code == 200

    def test_cannot_update_someone_else(self, client, account, other_headers):
        r = client.put(f"/api/users/{account['user']['id']}", json={"name": "Hacked"}, headers=other_headers)
        assert r.status_code == 403

    def test_empty_update_returns_profile(self, client, account, auth_headers):
        r = client.put(f"/api/users/{account['user']['id']}", json={}, headers=auth_headers)
        assert r.status_code == 200
        assert r.json()["data"]["name"] == "Ravi Kumar"


class TestDeleteUser:

    def test_delete_deactivates_account(self, client, account, auth_headers):
        user_id = account["user"]["id"]
        r = client.delete(f"/api/users/{user_id}", headers=auth_headers)
        assert r.status_code == 200
        assert r.json() == {"success": True, "message": "User deleted successfully"}

        # The old token no longer resolves to an account
        r = client.get("/api/users", headers=auth_headers)
        assert r.status_code == 401

        r = client.post("/api/auth/login", json={"email": "ravi@mailbox.in", "password": "secret123"})
        assert r.status_code == 401

    def test_deleted_email_stays_reserved(self, client, account, auth_headers):
        client.delete(f"/api/users/{account['user']['id']}", headers=auth_headers)
        r = client.post("/api/auth/register", json={
            "name": "Ravi Again",
            "email": "ravi@mailbox.in",
            "phone": "+919800000000",
            "password": "secret123",
        })
        assert r.status_code == 400
        assert r.json()["error"] == "Email or phone number already exists"

    def test_cannot_delete_someone_else(self, client, account, other_headers):
        r = client.delete(f"/api/users/{account['user']['id']}", headers=other_headers)
        assert r.status_code == 403

    def test_second_account_unaffected(self, client, account, auth_headers):
        other = register(client, name="Meera", email="meera@mailbox.in", phone="+919812345678")
        client.delete(f"/api/users/{account['user']['id']}", headers=auth_headers)
        r = client.post("/api/auth/login", json={"email": "meera@mailbox.in", "password": "secret123"})
        assert r.status_code == 200
        assert r.json()["data"]["user"]["id"] == other["user"]["id"]
