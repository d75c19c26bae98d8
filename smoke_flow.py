import os
import sys
import requests

BASE_URL = os.environ.get("PORTFOLIUM_URL", "http://localhost:3000")
EMAIL = "smoke@example.com"
PASSWORD = "Smoke1234"

# 1. Register (or login if the account is already there)
print("\n--- 1. Registering 'smoke@example.com' ---")
response = requests.post(f"{BASE_URL}/api/auth/register", json={"email": EMAIL, "password": PASSWORD, "name": "Smoke Test"})
if response.status_code == 201:
    print("User registered.")
elif response.status_code == 400 and "already exists" in response.text:
    print("User already exists, proceeding...")
else:
    print(f"Registration failed: {response.text}")
    sys.exit(1)

# 2. Login
print("\n--- 2. Logging in ---")
response = requests.post(f"{BASE_URL}/api/auth/login", json={"email": EMAIL, "password": PASSWORD})
if response.status_code != 200:
    print(f"Login failed: {response.text}")
    sys.exit(1)
tokens = response.json()
headers = {"Authorization": f"Bearer {tokens['accessToken']}"}
print(f"Access Token: {tokens['accessToken'][:20]}...")

# 3. Refresh
print("\n--- 3. Refreshing the access token ---")
response = requests.post(f"{BASE_URL}/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
if response.status_code != 200:
    print(f"Refresh failed: {response.text}")
    sys.exit(1)
headers = {"Authorization": f"Bearer {response.json()['accessToken']}"}

# 4. Refresh token must not work as an access token
print("\n--- 4. Using the refresh token as a bearer ---")
response = requests.get(f"{BASE_URL}/api/auth/me", headers={"Authorization": f"Bearer {tokens['refreshToken']}"})
if response.status_code == 401:
    print("SUCCESS: refresh token rejected.")
else:
    print(f"FAILURE: expected 401, got {response.status_code}")

# 5. Create a project and move it across the board
print("\n--- 5. Moving a project planning -> in-progress ---")
response = requests.post(f"{BASE_URL}/api/projects", json={"title": "Smoke", "description": "Smoke test project"}, headers=headers)
project_id = response.json()["project"]["id"]
response = requests.put(f"{BASE_URL}/api/projects/{project_id}", json={"status": "in-progress"}, headers=headers)
print(f"Status now: {response.json()['project']['status']}")

# 6. Invalid status is rejected
response = requests.put(f"{BASE_URL}/api/projects/{project_id}", json={"status": "shipped"}, headers=headers)
if response.status_code == 400:
    print(f"SUCCESS: invalid status rejected ({response.json()['error']})")
else:
    print(f"FAILURE: expected 400, got {response.status_code}")

requests.delete(f"{BASE_URL}/api/projects/{project_id}", headers=headers)
print("\n--- Smoke Test Complete ---")
