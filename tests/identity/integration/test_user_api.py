class TestRegisterEndpoint:
    def test_register_customer(self, client):
        response = client.post(
            "/api/v1/user",
            json={"name": "Nour", "email": "nour@campus.edu", "password": "secret-pass", "birthDate": "2003-05-01"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User created successfully"
        assert data["user"]["email"] == "nour@campus.edu"
        assert data["user"]["role"] == "customer"
        assert data["user"]["birthDate"] == "2003-05-01"
        assert "password" not in data["user"]
        assert "passwordHash" not in data["user"]

    def test_register_accepts_snake_case_keys(self, client):
        response = client.post(
            "/api/v1/user",
            json={"name": "Nour", "email": "nour@campus.edu", "password": "secret-pass", "birth_date": "2003-05-01"},
        )
        assert response.status_code == 201
        assert response.json()["user"]["birthDate"] == "2003-05-01"

    def test_missing_fields(self, client):
        response = client.post("/api/v1/user", json={"email": "nour@campus.edu"})
        assert response.status_code == 400
        assert response.json()["error"] == "Name, email, and password are required"

    def test_invalid_email(self, client):
        response = client.post("/api/v1/user", json={"name": "Nour", "email": "nope", "password": "pw"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid email format"

    def test_duplicate_email(self, client):
        body = {"name": "Nour", "email": "nour@campus.edu", "password": "secret-pass"}
        client.post("/api/v1/user", json=body)
        response = client.post("/api/v1/user", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "User with this email already exists"

    def test_bad_role(self, client):
        response = client.post(
            "/api/v1/user",
            json={"name": "Nour", "email": "nour@campus.edu", "password": "pw", "role": "admin"},
        )
        assert response.status_code == 400


class TestLoginEndpoint:
    def _register(self, client, role="customer"):
        client.post(
            "/api/v1/user",
            json={"name": "Rosa", "email": "rosa@campus.edu", "password": "secret-pass", "role": role},
        )

    def test_login_sets_session_cookie(self, client):
        self._register(client)
        response = client.post("/api/v1/user/login", json={"email": "rosa@campus.edu", "password": "secret-pass"})
        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert "session_token" in response.cookies
        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "samesite=strict" in set_cookie

    def test_owner_login_reports_truck(self, client):
        self._register(client, role="truckOwner")
        response = client.post("/api/v1/user/login", json={"email": "rosa@campus.edu", "password": "secret-pass"})
        user = response.json()["user"]
        assert user["truckName"] == "Rosa's Food Truck"
        assert isinstance(user["truckId"], int)

    def test_customer_login_has_no_truck_keys(self, client):
        self._register(client)
        response = client.post("/api/v1/user/login", json={"email": "rosa@campus.edu", "password": "secret-pass"})
        assert "truckId" not in response.json()["user"]

    def test_wrong_password(self, client):
        self._register(client)
        response = client.post("/api/v1/user/login", json={"email": "rosa@campus.edu", "password": "wrong"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid email or password"

    def test_logout_ends_session(self, api):
        customer = api.signup()
        response = customer.post("/api/v1/user/logout")
        assert response.status_code == 200
        assert response.json()["message"] == "Logout successful"

        response = customer.get("/api/v1/trucks/view")
        assert response.status_code == 401


class TestProfileEndpoint:
    def test_profile(self, client):
        created = client.post(
            "/api/v1/user", json={"name": "Nour", "email": "nour@campus.edu", "password": "secret-pass"}
        ).json()
        user_id = created["user"]["userId"]

        response = client.get(f"/api/v1/user/profile?userId={user_id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Nour"

    def test_profile_requires_user_id(self, client):
        response = client.get("/api/v1/user/profile")
        assert response.status_code == 400
        assert response.json()["error"] == "User ID is required"

    def test_profile_unknown_user(self, client):
        response = client.get("/api/v1/user/profile?userId=999")
        assert response.status_code == 404
        assert response.json()["error"] == "User not found"


class TestAuthenticationErrors:
    def test_no_cookie(self, client):
        response = client.get("/api/v1/cart/view")
        assert response.status_code == 401
        assert response.json()["error"] == "No session token found"

    def test_invalid_cookie(self, client):
        client.cookies.set("session_token", "bogus")
        response = client.get("/api/v1/cart/view")
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid session token"
