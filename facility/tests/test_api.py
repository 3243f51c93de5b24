"""
Integration tests for the care facility API.

Exercises the HTTP layer end to end: multipart resident intake, room
moves, the ledger and the error envelope.  Uses DRF's APITestCase with
forced authentication.
"""
import json

from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework import status
from rest_framework.test import APITestCase

from ..models import ActivityType, DonationCategory, Guardian, Medication, Resident, Room, User


class FacilityAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(username="admin", password="admin123", role="admin",
                                              full_name="Administrator Utama")
        self.client.force_authenticate(user=self.admin)
        self.room = Room.objects.create(room_name="Merpati", room_type="private", capacity=1)
        self.shared = Room.objects.create(room_name="Kenari", room_type="shared", capacity=2)
        self.activity = ActivityType.objects.create(name="Makan", color="#fd7e14", icon="fa-utensils")
        self.income = DonationCategory.objects.create(name="Donasi Umum", type="income")

    def _intake(self, **overrides):
        data = {
            "name": "Siti Aminah",
            "gender": "female",
            "birth_date": "1948-05-20",
            "join_date": "2024-02-01",
            "condition": "Sehat",
            "guardians": json.dumps([
                {"name": "Budi", "phone": "0812", "is_primary": True},
                {"name": "Tanpa Telepon"},
            ]),
            "medications": json.dumps([{"medication_name": "Amlodipine", "dosage": "5mg"}]),
            "hemoglobin": "12.5",
        }
        data.update(overrides)
        return self.client.post("/api/residents", data, format="multipart")

    def test_multipart_intake_creates_aggregate(self):
        photo = SimpleUploadedFile("face.jpg", b"jpegdata", content_type="image/jpeg")
        resp = self._intake(photo=photo, room_id=self.room.id)
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.data)
        self.assertEqual(resp.data["resident_id"], "R-001")
        self.assertIn("age", resp.data)

        detail = self.client.get(f"/api/residents/{resp.data['id']}")
        self.assertEqual(detail.status_code, status.HTTP_200_OK)
        data = detail.data["data"]
        self.assertEqual(data["room_name"], "Merpati")
        self.assertEqual([g["name"] for g in data["guardians"]], ["Budi"])
        self.assertEqual(data["medication"]["medication_name"], "Amlodipine")
        self.assertEqual(data["hematology"]["hemoglobin"], "12.5")
        self.assertIsNone(data["bloodSugar"])
        self.assertEqual(data["functional"], {"walking": "Mandiri", "eating": "Mandiri"})
        self.assertEqual(data["mental"], {"emotion": "Stabil", "consciousness": "Compos Mentis"})
        self.assertTrue(data["photo"].startswith("/uploads/photos/photo-"))

        self.room.refresh_from_db()
        self.assertEqual(self.room.current_occupants, 1)

    def test_missing_field_names_the_field(self):
        resp = self._intake(condition="")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data, {
            "ok": False,
            "error": {"code": "validation_error", "message": "condition is required", "field": "condition"},
        })
        self.assertFalse(Resident.objects.exists())
        self.assertFalse(Guardian.objects.exists())

    def test_malformed_guardians_payload_is_rejected(self):
        resp = self._intake(guardians="{not json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"]["field"], "guardians")
        self.assertFalse(Resident.objects.exists())

    def test_bad_nested_values_are_validation_errors(self):
        cases = [
            ("medications", [{"medication_name": "X", "status": "Bogus"}], "status"),
            ("medications", [{"medication_name": "X", "end_date": "not-a-date"}], "end_date"),
            ("guardians", [{"name": "Budi", "phone": "0812", "is_primary": "maybe"}], "is_primary"),
        ]
        for field, payload, detail in cases:
            with self.subTest(field=field, detail=detail):
                resp = self._intake(**{field: json.dumps(payload)})
                self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, resp.data)
                self.assertEqual(resp.data["error"]["code"], "validation_error")
                self.assertEqual(resp.data["error"]["field"], field)
                self.assertIn(detail, resp.data["error"]["message"])
        self.assertFalse(Resident.objects.exists())
        self.assertFalse(Medication.objects.exists())

    def test_assign_room_flow(self):
        rid = self._intake().data["id"]
        resp = self.client.post(f"/api/residents/{rid}/assign-room",
                                {"room_id": self.shared.id, "previous_room_id": None}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.data)
        self.assertEqual(resp.data["data"]["room_name"], "Kenari")

        # PUT is accepted as well
        resp = self.client.put(f"/api/residents/{rid}/assign-room",
                               {"room_id": self.room.id, "previous_room_id": self.shared.id}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.data)
        self.shared.refresh_from_db()
        self.room.refresh_from_db()
        self.assertEqual((self.shared.current_occupants, self.room.current_occupants), (0, 1))

    def test_full_room_returns_capacity_error(self):
        first = self._intake(room_id=self.room.id).data["id"]
        second = self._intake(name="Ahmad", gender="male").data["id"]
        resp = self.client.post(f"/api/residents/{second}/assign-room", {"room_id": self.room.id}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["error"]["code"], "capacity_exceeded")
        self.assertEqual(Resident.objects.get(pk=first).room_id, self.room.id)
        self.assertIsNone(Resident.objects.get(pk=second).room_id)

    def test_room_delete_conflicts_while_occupied(self):
        self._intake(room_id=self.room.id)
        resp = self.client.delete(f"/api/rooms/{self.room.id}")
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["error"]["code"], "conflict")
        self.assertTrue(Room.objects.filter(pk=self.room.pk).exists())

    def test_room_crud(self):
        resp = self.client.post("/api/rooms", {"room_name": "Pipit", "room_type": "shared", "capacity": 2},
                                format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.data)
        pk = resp.data["data"]["id"]
        dup = self.client.post("/api/rooms", {"room_name": "Pipit"}, format="json")
        self.assertEqual(dup.status_code, status.HTTP_400_BAD_REQUEST)

        resp = self.client.put(f"/api/rooms/{pk}", {"status": "maintenance", "notes": "cat ulang"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.data)
        self.assertEqual(resp.data["data"]["status"], "maintenance")
        self.assertEqual(resp.data["data"]["capacity"], 2)

        names = [r["room_name"] for r in self.client.get("/api/rooms/available").data["data"]]
        self.assertEqual(names, ["Kenari", "Merpati", "Pipit"])

        self.assertEqual(self.client.delete(f"/api/rooms/{pk}").status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.delete(f"/api/rooms/{pk}").status_code, status.HTTP_404_NOT_FOUND)

    def test_transaction_with_attachment(self):
        proof = SimpleUploadedFile("bukti.pdf", b"%PDF-1.4", content_type="application/pdf")
        resp = self.client.post("/api/transactions", {
            "category_id": self.income.id, "amount": "150000", "transaction_date": "2024-05-01",
            "source": "Hamba Allah", "attachment": proof,
        }, format="multipart")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.data)
        self.assertEqual(resp.data["transaction_id"], "INC-001")
        self.assertTrue(resp.data["attachment_path"].startswith("transactions/proof-"))

        listing = self.client.get("/api/transactions?type=income&month=2024-05").data["data"]
        self.assertEqual(listing[0]["category_name"], "Donasi Umum")
        self.assertEqual(listing[0]["payment_method"], "cash")

        summary = self.client.get("/api/financial-summary?year=2024").data["data"]
        self.assertEqual(summary["monthly_breakdown"][0]["month"], "2024-05")

        resp = self.client.delete(f"/api/transactions/{resp.data['id']}")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

    def test_unknown_category_is_404(self):
        resp = self.client.post("/api/transactions", {
            "category_id": 9999, "amount": "1", "transaction_date": "2024-05-01",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "not_found")

    def test_daily_record_endpoints(self):
        rid = self._intake().data["id"]
        resp = self.client.post("/api/records", {
            "resident_id": rid, "activity_type_id": self.activity.id,
            "record_datetime": "2024-05-02T08:15", "notes": "Makan pagi habis",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.data)
        self.assertEqual(resp.data["data"]["resident_type"], "Oma")
        self.assertEqual(resp.data["data"]["activity_icon"], "fa-utensils")

        empty = self.client.post("/api/records", {
            "resident_id": rid, "activity_type_id": self.activity.id, "notes": "",
        }, format="json")
        self.assertEqual(empty.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(empty.data["error"]["field"], "notes")

        listing = self.client.get("/api/records?date_from=2024-05-02&date_to=2024-05-02").data["data"]
        self.assertEqual(len(listing), 1)
        self.assertEqual(self.client.get("/api/records?date_from=2024-05-03").data["data"], [])

        resp = self.client.delete(f"/api/records/{listing[0]['id']}")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

    def test_reference_lists_and_dashboard(self):
        self.assertEqual([a["name"] for a in self.client.get("/api/activity-types").data["data"]], ["Makan"])
        self.assertEqual(self.client.get("/api/donation-categories").data["data"][0]["type"], "income")
        self._intake()
        stats = self.client.get("/api/dashboard-stats").data["data"]
        self.assertEqual(stats["active_residents"], 1)
        self.assertIn("monthly_income", stats)
