from django.test import TestCase
from rest_framework.test import APIClient

from accounts.models import User
from carriers.models import Carrier
from events.models import Event


class UserManagementApiTests(TestCase):
    def setUp(self):
        self.northwind = Carrier.objects.create(legal_name="Northwind Mutual", display_name="Northwind")
        self.southwind = Carrier.objects.create(legal_name="Southwind Re", display_name="Southwind")

        self.admin = User.objects.create_user(
            email="admin@appetite.test", password="pass-123", name="root", roles="admin"
        )
        self.carrier_admin = User.objects.create_user(
            email="lead@northwind.test",
            password="pass-123",
            name="lead",
            roles="carrier",
            carrier=self.northwind,
            organization_name="Northwind",
        )
        self.northwind_user = User.objects.create_user(
            email="analyst@northwind.test",
            password="pass-123",
            name="analyst",
            roles="user",
            carrier=self.northwind,
        )
        self.southwind_user = User.objects.create_user(
            email="analyst@southwind.test",
            password="pass-123",
            name="south",
            roles="user",
            carrier=self.southwind,
        )

    def _client(self, user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    def test_admin_lists_every_user(self):
        response = self._client(self.admin).get("/api/users/")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["pagination"]["total_items"], 4)
        self.assertEqual(len(body["items"]), 4)

    def test_carrier_admin_only_lists_own_carrier(self):
        response = self._client(self.carrier_admin).get("/api/users/")

        self.assertEqual(response.status_code, 200)
        ids = {item["id"] for item in response.json()["items"]}
        self.assertEqual(ids, {self.carrier_admin.pk, self.northwind_user.pk})

    def test_list_filters_by_role(self):
        response = self._client(self.admin).get("/api/users/", {"role": "carrier"})
        ids = [item["id"] for item in response.json()["items"]]
        self.assertEqual(ids, [self.carrier_admin.pk])

    def test_plain_user_cannot_list_users(self):
        response = self._client(self.northwind_user).get("/api/users/")
        self.assertEqual(response.status_code, 403)

    def test_create_profile_returns_temporary_password(self):
        response = self._client(self.admin).post(
            "/api/users/",
            {
                "name": "New Carrier Lead",
                "email": "lead@eastwind.test",
                "roles": ["carrier"],
                "organization": {"name": "Eastwind"},
            },
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(len(body["temporary_password"]), 12)
        self.assertEqual(body["roles"], ["carrier"])
        self.assertEqual(body["organization"]["name"], "Eastwind")

        user = User.objects.get(pk=body["id"])
        self.assertTrue(user.check_password(body["temporary_password"]))
        self.assertEqual(user.carrier.display_name, "Eastwind")
        self.assertTrue(Event.objects.filter(action=Event.ACTION_CREATE, user_id=self.admin.pk).exists())

    def test_create_profile_rejects_admin_role(self):
        response = self._client(self.admin).post(
            "/api/users/",
            {"name": "Another Root", "email": "root2@appetite.test", "roles": ["admin"]},
            format="json",
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["detail"], "Cannot create Super Admin users")

    def test_create_profile_with_unknown_carrier_fails(self):
        response = self._client(self.admin).post(
            "/api/users/",
            {
                "name": "Orphan",
                "email": "orphan@appetite.test",
                "roles": ["user"],
                "organization": {"id": "9999"},
            },
            format="json",
        )
        self.assertEqual(response.status_code, 400)

    def test_carrier_admin_creates_users_in_own_carrier(self):
        response = self._client(self.carrier_admin).post(
            "/api/users/",
            {
                "name": "Junior",
                "email": "junior@northwind.test",
                "roles": ["user"],
                "organization": {"id": str(self.southwind.carrier_id)},
            },
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        user = User.objects.get(email="junior@northwind.test")
        self.assertEqual(user.carrier_id, self.northwind.carrier_id)
        self.assertEqual(user.organization_name, "Northwind")

    def test_create_profile_rejects_duplicate_email(self):
        response = self._client(self.admin).post(
            "/api/users/",
            {"name": "Dup", "email": "analyst@northwind.test", "roles": ["user"]},
            format="json",
        )
        self.assertEqual(response.status_code, 400)

    def test_quick_create_by_admin_with_carrier(self):
        response = self._client(self.admin).post(
            "/api/users/quick-create/",
            {
                "name": "Quick",
                "email": "quick@southwind.test",
                "role": "user",
                "carrier_id": self.southwind.carrier_id,
            },
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["email"], "quick@southwind.test")
        self.assertTrue(body["temporary_password"])
        user = User.objects.get(pk=body["user_id"])
        self.assertEqual(user.carrier_id, self.southwind.carrier_id)
        self.assertEqual(user.organization_name, "Southwind")

    def test_quick_create_by_carrier_admin_ignores_other_carrier(self):
        response = self._client(self.carrier_admin).post(
            "/api/users/quick-create/",
            {
                "name": "Quick",
                "email": "quick@northwind.test",
                "role": "user",
                "carrier_id": self.southwind.carrier_id,
            },
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        user = User.objects.get(email="quick@northwind.test")
        self.assertEqual(user.carrier_id, self.northwind.carrier_id)

    def test_carrier_admin_cannot_quick_create_admin(self):
        response = self._client(self.carrier_admin).post(
            "/api/users/quick-create/",
            {"name": "Sneaky", "email": "sneaky@northwind.test", "role": "admin"},
            format="json",
        )
        self.assertEqual(response.status_code, 403)
        self.assertFalse(User.objects.filter(email="sneaky@northwind.test").exists())

    def test_user_reads_own_profile_only(self):
        client = self._client(self.northwind_user)

        own = client.get(f"/api/users/{self.northwind_user.pk}/")
        other = client.get(f"/api/users/{self.southwind_user.pk}/")

        self.assertEqual(own.status_code, 200)
        self.assertEqual(own.json()["organization"]["id"], str(self.northwind.carrier_id))
        self.assertEqual(other.status_code, 403)

    def test_admin_reads_any_profile_and_gets_404_for_unknown(self):
        client = self._client(self.admin)
        self.assertEqual(client.get(f"/api/users/{self.southwind_user.pk}/").status_code, 200)
        self.assertEqual(client.get("/api/users/usr-missing/").status_code, 404)

    def test_admin_updates_user(self):
        response = self._client(self.admin).patch(
            f"/api/users/{self.northwind_user.pk}/",
            {"name": "Renamed", "role": "carrier", "is_active": False},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.northwind_user.refresh_from_db()
        self.assertEqual(self.northwind_user.name, "Renamed")
        self.assertEqual(self.northwind_user.role_list, ["carrier"])
        self.assertFalse(self.northwind_user.is_active)

    def test_update_rejects_empty_payload(self):
        response = self._client(self.admin).patch(
            f"/api/users/{self.northwind_user.pk}/", {}, format="json"
        )
        self.assertEqual(response.status_code, 400)

    def test_non_admin_cannot_update_or_delete(self):
        client = self._client(self.carrier_admin)

        update = client.patch(
            f"/api/users/{self.northwind_user.pk}/", {"name": "Nope"}, format="json"
        )
        delete = client.delete(f"/api/users/{self.northwind_user.pk}/")

        self.assertEqual(update.status_code, 403)
        self.assertEqual(delete.status_code, 403)
        self.assertTrue(User.objects.filter(pk=self.northwind_user.pk).exists())

    def test_admin_deletes_user(self):
        response = self._client(self.admin).delete(f"/api/users/{self.southwind_user.pk}/")

        self.assertEqual(response.status_code, 204)
        self.assertFalse(User.objects.filter(pk=self.southwind_user.pk).exists())
        self.assertTrue(
            Event.objects.filter(action=Event.ACTION_DELETE, metadata__user_id=self.southwind_user.pk).exists()
        )

    def test_update_rejects_email_of_another_user_in_other_case(self):
        response = self._client(self.admin).patch(
            f"/api/users/{self.northwind_user.pk}/",
            {"email": "Analyst@SOUTHWIND.test"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.northwind_user.refresh_from_db()
        self.assertEqual(self.northwind_user.email, "analyst@northwind.test")

    def test_quick_create_rejects_domain_case_duplicate(self):
        response = self._client(self.admin).post(
            "/api/users/quick-create/",
            {"name": "Dup", "email": "analyst@NORTHWIND.test", "role": "user"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
