"""
Tests for help request CRUD and the status workflow over HTTP.
"""
from datetime import datetime, timedelta

import pytest

from helpportal.request_service import crud
from helpportal.shared.database import init_db, make_engine, make_session_factory
from helpportal.shared.enums import RequestStatus
from helpportal.shared.errors import InvalidTransition
from helpportal.user_service import crud as user_crud


def _put(client, request_id, status, actor_id):
    return client.put(f"/requests/{request_id}", json={"status": status, "actor_id": actor_id})


class TestCreateRequest:

    def test_new_request_is_pending_without_helper(self, couch_request, alice):
        assert couch_request["status"] == "Pending"
        assert couch_request["helper_id"] is None
        assert couch_request["helper_name"] is None
        assert couch_request["resident_id"] == alice["id"]
        assert couch_request["resident_name"] == "Alice"
        assert couch_request["urgency"] == "Medium"

    def test_unknown_category_is_rejected(self, client, alice):
        r = client.post(
            "/requests",
            json={"resident_id": alice["id"], "title": "x", "description": "", "category": "Plumbing"},
        )
        assert r.status_code == 422

    def test_unknown_resident_is_404(self, client):
        r = client.post(
            "/requests",
            json={"resident_id": "ghost", "title": "x", "description": "", "category": "Other"},
        )
        assert r.status_code == 404

    def test_blank_title_is_rejected(self, client, alice):
        r = client.post(
            "/requests",
            json={"resident_id": alice["id"], "title": "   ", "description": "", "category": "Other"},
        )
        assert r.status_code == 422

    def test_timestamps_carry_utc_offset(self, couch_request):
        for field in ("created_at", "updated_at"):
            stamp = datetime.fromisoformat(couch_request[field].replace("Z", "+00:00"))
            assert stamp.utcoffset() == timedelta(0)

    def test_helper_cannot_create_request(self, client, bob):
        r = client.post(
            "/requests",
            json={"resident_id": bob["id"], "title": "x", "description": "", "category": "Other"},
        )
        assert r.status_code == 403

    def test_optional_fields_are_kept(self, client, alice):
        r = client.post(
            "/requests",
            json={
                "resident_id": alice["id"],
                "title": "Groceries run",
                "description": "Milk and bread",
                "category": "Groceries",
                "urgency": "High",
                "location": "12 Maple St",
                "attachments": "https://example.com/list.png",
            },
        )
        assert r.status_code == 201
        body = r.json()
        assert body["urgency"] == "High"
        assert body["location"] == "12 Maple St"
        assert body["attachments"] == "https://example.com/list.png"


class TestListAndFetch:

    def test_get_one_and_missing(self, client, couch_request):
        r = client.get(f"/requests/{couch_request['id']}")
        assert r.status_code == 200
        assert r.json()["title"] == "Move couch"
        assert client.get("/requests/missing").status_code == 404

    def test_filters(self, client, alice, bob, register, couch_request):
        dave = register("Dave", "dave@example.com", "Resident")
        other = client.post(
            "/requests",
            json={"resident_id": dave["id"], "title": "Walk dog", "description": "", "category": "Pet Care"},
        ).json()
        _put(client, other["id"], "Accepted", bob["id"])

        everything = client.get("/requests").json()
        assert {r["id"] for r in everything} == {couch_request["id"], other["id"]}

        mine = client.get("/requests", params={"requester_id": alice["id"]}).json()
        assert [r["id"] for r in mine] == [couch_request["id"]]

        bobs = client.get("/requests", params={"volunteer_id": bob["id"]}).json()
        assert [r["id"] for r in bobs] == [other["id"]]

        pending = client.get("/requests", params={"status": "Pending"}).json()
        assert [r["id"] for r in pending] == [couch_request["id"]]

    def test_list_is_newest_first(self, client, alice):
        for title in ("one", "two", "three"):
            client.post(
                "/requests",
                json={"resident_id": alice["id"], "title": title, "description": "", "category": "Other"},
            )
        stamps = [r["created_at"] for r in client.get("/requests").json()]
        assert stamps == sorted(stamps, reverse=True)

    def test_delete_is_unconditional(self, client, couch_request):
        r = client.delete(f"/requests/{couch_request['id']}")
        assert r.status_code == 200
        assert r.json()["deleted"] is True
        assert client.get(f"/requests/{couch_request['id']}").status_code == 404

        again = client.delete(f"/requests/{couch_request['id']}")
        assert again.status_code == 200
        assert again.json()["deleted"] is False


class TestStatusWorkflow:

    def test_move_couch_scenario(self, client, couch_request, bob, carol):
        rid = couch_request["id"]

        r = _put(client, rid, "Accepted", bob["id"])
        assert r.status_code == 200
        assert r.json()["status"] == "Accepted"
        assert r.json()["helper_id"] == bob["id"]
        assert r.json()["helper_name"] == "Bob"

        r = _put(client, rid, "Accepted", carol["id"])
        assert r.status_code == 409

        r = _put(client, rid, "In-progress", bob["id"])
        assert r.status_code == 200
        assert r.json()["status"] == "In-progress"

        r = _put(client, rid, "Completed", bob["id"])
        assert r.status_code == 200
        assert r.json()["status"] == "Completed"

        r = _put(client, rid, "Completed", carol["id"])
        assert r.status_code == 403

        final = client.get(f"/requests/{rid}").json()
        assert final["status"] == "Completed"
        assert final["helper_name"] == "Bob"

    def test_resident_cannot_accept(self, client, couch_request, alice):
        r = _put(client, couch_request["id"], "Accepted", alice["id"])
        assert r.status_code == 403
        assert client.get(f"/requests/{couch_request['id']}").json()["status"] == "Pending"

    def test_unknown_actor_cannot_accept(self, client, couch_request):
        assert _put(client, couch_request["id"], "Accepted", "ghost").status_code == 403

    def test_other_helper_cannot_start(self, client, couch_request, bob, carol):
        _put(client, couch_request["id"], "Accepted", bob["id"])
        r = _put(client, couch_request["id"], "In-progress", carol["id"])
        assert r.status_code == 403
        assert "assigned helper" in r.json()["detail"]

    def test_cannot_start_pending_request(self, client, couch_request, bob):
        assert _put(client, couch_request["id"], "In-progress", bob["id"]).status_code == 403

    def test_cannot_skip_to_completed(self, client, couch_request, bob):
        _put(client, couch_request["id"], "Accepted", bob["id"])
        assert _put(client, couch_request["id"], "Completed", bob["id"]).status_code == 409

    def test_cannot_move_backward(self, client, couch_request, bob):
        _put(client, couch_request["id"], "Accepted", bob["id"])
        _put(client, couch_request["id"], "In-progress", bob["id"])
        assert _put(client, couch_request["id"], "Accepted", bob["id"]).status_code == 409
        assert _put(client, couch_request["id"], "Pending", bob["id"]).status_code == 409

    def test_unknown_request_is_404(self, client, bob):
        assert _put(client, "missing", "Accepted", bob["id"]).status_code == 404

    def test_unknown_status_is_422(self, client, couch_request, bob):
        assert _put(client, couch_request["id"], "Cancelled", bob["id"]).status_code == 422


class TestConcurrentAccept:

    def test_stale_reader_loses_the_race(self, tmp_path):
        engine = make_engine(f"sqlite:///{tmp_path / 'race.db'}")
        init_db(engine)
        SessionLocal = make_session_factory(engine)

        setup = SessionLocal()
        alice = user_crud.register(setup, "Alice", "alice@example.com", "", "Resident")
        bob = user_crud.register(setup, "Bob", "bob@example.com", "", "Helper")
        carol = user_crud.register(setup, "Carol", "carol@example.com", "", "Helper")
        req = crud.create_request(
            setup,
            {"resident_id": alice.id, "title": "Move couch", "description": "", "category": "Home Repair"},
        )
        setup.close()

        carol_session = SessionLocal()
        # carol's session has already seen the request as Pending
        assert crud.get_request(carol_session, req.id).status == "Pending"

        bob_session = SessionLocal()
        crud.update_status(bob_session, req.id, RequestStatus.ACCEPTED, bob.id)
        bob_session.close()

        with pytest.raises(InvalidTransition):
            crud.update_status(carol_session, req.id, RequestStatus.ACCEPTED, carol.id)
        carol_session.close()

        check = SessionLocal()
        stored = crud.get_request(check, req.id)
        assert stored.helper_id == bob.id
        assert stored.helper_name == "Bob"
        check.close()
        engine.dispose()
