"""
Integration tests for owner-scoped customer management
"""


class TestCreateCustomer:

    def test_create(self, client, auth_headers, account):
        r = client.post("/api/customers", json={
            "name": "Anand Traders",
            "phone": "+919000000001",
            "email": "anand@mailbox.in",
            "category": "wholesale",
            "credit_limit": 5000,
        }, headers=auth_headers)
        assert r.status_code == 201
        body = r.json()
        assert body["message"] == "Customer created successfully"
        data = body["data"]
        assert data["user_id"] == account["user"]["id"]
        assert data["credit_limit"] == 5000
        assert data["balance"] == 0

    def test_missing_name_and_phone(self, client, auth_headers):
        r = client.post("/api/customers", json={"email": "x@mailbox.in"}, headers=auth_headers)
        assert r.status_code == 400
        assert [d["field"] for d in r.json()["details"]] == ["name", "phone"]

    def test_invalid_phone(self, client, auth_headers):
        r = client.post("/api/customers", json={"name": "Anand", "phone": "abc"}, headers=auth_headers)
        assert r.status_code == 400
        assert r.json()["details"] == [{"field": "phone", "message": "Invalid phone number format"}]

    def test_negative_credit_limit(self, client, auth_headers):
        r = client.post("/api/customers", json={"name": "Anand", "phone": "+919000000001", "credit_limit": -1}, headers=auth_headers)
        assert r.status_code == 400
        assert r.json()["details"][0]["message"] == "Credit limit must be a positive number"

    def test_credit_limit_with_three_decimals(self, client, auth_headers):
        r = client.post("/api/customers", json={"name": "Anand", "phone": "+919000000001", "credit_limit": "10.125"}, headers=auth_headers)
        assert r.status_code == 400
        assert r.json()["details"] == [{"field": "credit_limit", "message": "Credit limit must be a positive number"}]

    def test_client_cannot_pick_owner(self, client, auth_headers, account):
        r = client.post("/api/customers", json={"name": "Anand", "phone": "+919000000001", "user_id": 999}, headers=auth_headers)
        assert r.status_code == 201
        assert r.json()["data"]["user_id"] == account["user"]["id"]

    def test_duplicate_phone_same_owner(self, client, auth_headers, create_customer):
        create_customer()
        r = client.post("/api/customers", json={"name": "Other", "phone": "+919000000001"}, headers=auth_headers)
        assert r.status_code == 400
        assert r.json()["error"] == "Customer with this phone number already exists"

    def test_same_phone_different_owner(self, client, other_headers, create_customer):
        create_customer()
        r = client.post("/api/customers", json={"name": "Anand", "phone": "+919000000001"}, headers=other_headers)
        assert r.status_code == 201


class TestListCustomers:

    def test_pagination(self, client, auth_headers, create_customer):
        for i in range(25):
            create_customer(name=f"Customer {i:02d}", phone=f"+91900000{i:04d}")

        first = client.get("/api/customers", params={"page": 1, "limit": 10}, headers=auth_headers).json()["data"]
        assert len(first["data"]) == 10
        assert first["pagination"]["has_next"] is True
        assert first["pagination"]["has_prev"] is False

        r = client.get("/api/customers", params={"page": 3, "limit": 10}, headers=auth_headers)
        assert r.status_code == 200
        data = r.json()["data"]
        assert len(data["data"]) == 5
        assert data["data"][0]["name"] == "Customer 20"
        assert data["pagination"] == {
            "current_page": 3,
            "per_page": 10,
            "total": 25,
            "total_pages": 3,
            "has_next": False,
            "has_prev": True,
        }

    def test_sorted_by_name(self, client, auth_headers, create_customer):
        create_customer(name="Zoya", phone="+919000000003")
        create_customer(name="Arjun", phone="+919000000004")
        r = client.get("/api/customers", headers=auth_headers)
        assert [c["name"] for c in r.json()["data"]["data"]] == ["Arjun", "Zoya"]

    def test_search(self, client, auth_headers, create_customer):
        create_customer(name="Anand", phone="+919000000001")
        create_customer(name="Banana Co", phone="+919000000002")
        create_customer(name="Kiran", phone="+919000000003")
        r = client.get("/api/customers", params={"search": "ana"}, headers=auth_headers)
        names = [c["name"] for c in r.json()["data"]["data"]]
        assert names == ["Anand", "Banana Co"]
        assert r.json()["data"]["pagination"]["total"] == 2

    def test_search_wildcards_are_literal(self, client, auth_headers, create_customer):
        create_customer(name="Anand", phone="+919000000001")
        create_customer(name="50% Stores", phone="+919000000002")
        create_customer(name="A_B Mart", phone="+919000000003")

        def names(term):
            r = client.get("/api/customers", params={"search": term}, headers=auth_headers)
            return [c["name"] for c in r.json()["data"]["data"]]

        assert names("%") == ["50% Stores"]
        assert names("_") == ["A_B Mart"]
        assert names("\\") == []

    def test_limit_is_capped(self, client, auth_headers):
        r = client.get("/api/customers", params={"limit": 500}, headers=auth_headers)
        assert r.status_code == 200
        assert r.json()["data"]["pagination"]["per_page"] == 100

    def test_invalid_page(self, client, auth_headers):
        r = client.get("/api/customers", params={"page": 0}, headers=auth_headers)
        assert r.status_code == 400

    def test_only_own_customers(self, client, auth_headers, other_headers, create_customer):
        create_customer()
        r = client.get("/api/customers", headers=other_headers)
        assert r.json()["data"]["data"] == []
        assert r.json()["data"]["pagination"]["total"] == 0

    def test_with_balance(self, client, auth_headers, create_customer, create_transaction):
        anand = create_customer(name="Anand", phone="+919000000001")
        create_customer(name="Kiran", phone="+919000000002")
        create_transaction(anand["id"], type="credit", amount=100)
        create_transaction(anand["id"], type="debit", amount=30)

        r = client.get("/api/customers", params={"with_balance": True}, headers=auth_headers)
        balances = {c["name"]: c["balance"] for c in r.json()["data"]["data"]}
        assert balances == {"Anand": 70, "Kiran": 0}


class TestSingleCustomer:

    def test_get_includes_balance(self, client, auth_headers, create_customer, create_transaction):
        customer = create_customer()
        create_transaction(customer["id"], type="credit", amount=250.5)
        r = client.get(f"/api/customers/{customer['id']}", headers=auth_headers)
        assert r.status_code == 200
        assert r.json()["data"]["balance"] == 250.5

    def test_other_owner_sees_not_found(self, client, other_headers, create_customer):
        customer = create_customer()
        r = client.get(f"/api/customers/{customer['id']}", headers=other_headers)
        assert r.status_code == 404
        assert r.json()["error"] == "Customer not found"

    def test_update(self, client, auth_headers, create_customer):
        customer = create_customer()
        r = client.put(f"/api/customers/{customer['id']}", json={"name": "Anand & Sons", "address": ""}, headers=auth_headers)
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["name"] == "Anand &amp; Sons"
        assert data["address"] is None
        assert data["phone"] == customer["phone"]

    def test_update_phone_conflict(self, client, auth_headers, create_customer):
        create_customer(name="Anand", phone="+919000000001")
        kiran = create_customer(name="Kiran", phone="+919000000002")
        r = client.put(f"/api/customers/{kiran['id']}", json={"phone": "+919000000001"}, headers=auth_headers)
        assert r.status_code == 400
        assert r.json()["error"] == "Customer with this phone number already exists"

    def test_update_phone_to_own_value(self, client, auth_headers, create_customer):
        customer = create_customer()
        r = client.put(f"/api/customers/{customer['id']}", json={"phone": customer["phone"]}, headers=auth_headers)
        assert r.status_code == 200

    def test_update_other_owner(self, client, other_headers, create_customer):
        customer = create_customer()
        r = client.put(f"/api/customers/{customer['id']}", json={"name": "Mine now"}, headers=other_headers)
        assert r.status_code == 404

    def test_delete_removes_transactions(self, client, auth_headers, create_customer, create_transaction):
        customer = create_customer()
        entry = create_transaction(customer["id"])
        r = client.delete(f"/api/customers/{customer['id']}", headers=auth_headers)
        assert r.status_code == 200
        assert r.json()["message"] == "Customer deleted successfully"

        assert client.get(f"/api/customers/{customer['id']}", headers=auth_headers).status_code == 404
        assert client.get(f"/api/transactions/{entry['id']}", headers=auth_headers).status_code == 404

    def test_delete_other_owner(self, client, auth_headers, other_headers, create_customer):
        customer = create_customer()
        r = client.delete(f"/api/customers/{customer['id']}", headers=other_headers)
        assert r.status_code == 404
        assert client.get(f"/api/customers/{customer['id']}", headers=auth_headers).status_code == 200
