from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from rest_framework.test import APIClient

from accounts.models import User
from carriers.models import Carrier
from catalog.models import Rule
from events.models import Event


def _csv(content, name="rules.csv"):
    if isinstance(content, str):
        content = content.encode("utf-8")
    return SimpleUploadedFile(name, content, content_type="text/csv")


class RuleUploadApiTests(TestCase):
    def setUp(self):
        self.northwind = Carrier.objects.create(legal_name="Northwind Mutual", display_name="Northwind")
        self.southwind = Carrier.objects.create(legal_name="Southwind Re", display_name="Southwind")

        self.carrier_admin = User.objects.create_user(
            email="lead@northwind.test",
            password="pass-123",
            name="lead",
            roles="carrier",
            carrier=self.northwind,
        )
        self.carrier_user = User.objects.create_user(
            email="analyst@northwind.test",
            password="pass-123",
            name="analyst",
            roles="user",
            carrier=self.northwind,
        )

        self.client = APIClient()
        self.client.force_authenticate(user=self.carrier_admin)

    def _upload(self, content, **extra):
        data = {"file": _csv(content)}
        data.update(extra)
        return self.client.post("/api/rules/upload/", data, format="multipart")

    def test_creates_rules_for_callers_carrier(self):
        response = self._upload(
            "rule_id,title,description\n"
            "NW-100,Roofers,Decline roofing contractors\n"
            "NW-101,Bakeries,\n"
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "completed")
        self.assertEqual((body["created"], body["updated"], body["failed"]), (2, 0, 0))
        self.assertEqual(body["report_url"], f"/api/uploads/{body['upload_id']}/report")

        roofers = Rule.objects.get(pk="NW-100")
        self.assertEqual(roofers.carrier_id, self.northwind.carrier_id)
        self.assertEqual(roofers.status, "active")
        self.assertEqual(roofers.created_by, self.carrier_admin.pk)
        self.assertIsNone(Rule.objects.get(pk="NW-101").description)
        self.assertTrue(
            Event.objects.filter(action=Event.ACTION_UPLOAD, metadata__upload_id=body["upload_id"]).exists()
        )

    def test_reports_row_errors_and_keeps_good_rows(self):
        Rule.objects.create(rule_id="NW-100", title="Existing", carrier=self.northwind)

        response = self._upload(
            "rule_id,title,description\n"
            "NW-100,Roofers,dup\n"
            "NW-200,only-two-columns\n"
            ",Untitled,blank id\n"
            "NW-201,Florists,ok\n"
        )

        body = response.json()
        self.assertEqual((body["created"], body["updated"], body["failed"]), (1, 0, 3))
        self.assertEqual(
            body["errors"],
            [
                {"row": 1, "message": "Rule already exists"},
                {"row": 2, "message": "Insufficient columns"},
                {"row": 3, "message": "Rule id is required"},
            ],
        )
        self.assertTrue(Rule.objects.filter(pk="NW-201").exists())
        self.assertEqual(Rule.objects.get(pk="NW-100").title, "Existing")

    def test_overwrite_updates_existing_rules(self):
        Rule.objects.create(rule_id="NW-100", title="Existing", carrier=self.northwind)

        response = self._upload("rule_id,title,description\nNW-100,Roofers v2,updated\n", overwrite="true")

        body = response.json()
        self.assertEqual((body["created"], body["updated"], body["failed"]), (0, 1, 0))
        rule = Rule.objects.get(pk="NW-100")
        self.assertEqual(rule.title, "Roofers v2")
        self.assertEqual(rule.description, "updated")
        self.assertIsNotNone(rule.updated_at)

    def test_overwrite_flag_from_query_string(self):
        Rule.objects.create(rule_id="NW-100", title="Existing", carrier=self.northwind)

        data = {"file": _csv("rule_id,title,description\nNW-100,Roofers v2,updated\n")}
        response = self.client.post("/api/rules/upload/?overwrite=true", data, format="multipart")

        self.assertEqual(response.json()["updated"], 1)

    def test_overwrite_cannot_touch_other_carrier_rule(self):
        Rule.objects.create(rule_id="SW-100", title="Theirs", carrier=self.southwind)

        response = self._upload("rule_id,title,description\nSW-100,Mine now,\n", overwrite="true")

        body = response.json()
        self.assertEqual(body["failed"], 1)
        self.assertEqual(body["errors"][0]["message"], "Access denied to other carrier's data")
        self.assertEqual(Rule.objects.get(pk="SW-100").title, "Theirs")

    def test_other_carrier_rule_id_is_not_disclosed_without_overwrite(self):
        Rule.objects.create(rule_id="SW-100", title="Theirs", carrier=self.southwind)

        body = self._upload("rule_id,title,description\nSW-100,Mine now,\n").json()

        self.assertEqual(
            body["errors"],
            [{"row": 1, "message": "Access denied to other carrier's data"}],
        )
        self.assertEqual(Rule.objects.get(pk="SW-100").title, "Theirs")

    def test_header_only_file_does_nothing(self):
        body = self._upload("rule_id,title,description\n").json()
        self.assertEqual((body["created"], body["updated"], body["failed"]), (0, 0, 0))

    def test_undecodable_file_is_reported_on_row_zero(self):
        body = self._upload(b"\xff\xfe\xfa not utf-8").json()

        self.assertEqual(body["failed"], 1)
        self.assertEqual(body["errors"][0]["row"], 0)
        self.assertTrue(body["errors"][0]["message"].startswith("File processing error:"))

    def test_utf8_bom_is_stripped(self):
        body = self._upload("\ufeffrule_id,title,description\nNW-300,Caf\u00e9s,\n".encode("utf-8")).json()

        self.assertEqual(body["created"], 1)
        self.assertEqual(Rule.objects.get(pk="NW-300").title, "Caf\u00e9s")

    def test_missing_file_is_rejected(self):
        response = self.client.post("/api/rules/upload/", {}, format="multipart")
        self.assertEqual(response.status_code, 400)

    def test_plain_user_cannot_upload(self):
        client = APIClient()
        client.force_authenticate(user=self.carrier_user)

        response = client.post(
            "/api/rules/upload/",
            {"file": _csv("rule_id,title,description\nNW-1,x,y\n")},
            format="multipart",
        )
        self.assertEqual(response.status_code, 403)
