from routers.retailers.helpers import RetailerHelpers
from utils.errors import InvalidTransition
import pytest

GST_DOC = {"documentType": "gst_certificate", "documentName": "gst.pdf", "documentUrl": "https://files.example.com/gst.pdf"}


def test_register_retailer_promotes_user(client, registered_user, retailer_payload):
    response = client.post("/retailers/register", json=retailer_payload)
    assert response.status_code == 201
    retailer = response.json()
    assert retailer["verificationStatus"] == "pending"
    assert retailer["userId"] == registered_user["id"]
    assert retailer["registrationDate"]
    assert client.get(f"/users/{registered_user['id']}").json()["role"] == "retailer"


def test_second_registration_for_same_user_is_conflict(client, store, retailer_payload):
    client.post("/retailers/register", json=retailer_payload)
    response = client.post("/retailers/register", json=dict(retailer_payload, businessName="Other"))
    assert response.status_code == 409
    assert response.json()["message"] == "Retailer account already exists for this user"
    assert len(store.retailers) == 1


def test_register_for_unknown_user_is_404(client, retailer_payload):
    response = client.post("/retailers/register", json=dict(retailer_payload, userId=42))
    assert response.status_code == 404


def test_documents_at_registration_get_upload_date(client, retailer_payload):
    retailer = client.post("/retailers/register", json=dict(retailer_payload, verificationDocuments=[GST_DOC])).json()
    [document] = retailer["verificationDocuments"]
    assert document["documentType"] == "gst_certificate"
    assert document["verificationStatus"] == "pending"
    assert document["uploadDate"] is not None


def test_add_document_keeps_retailer_status(client, verified_retailer):
    response = client.post(f"/retailers/{verified_retailer['id']}/documents", json=GST_DOC)
    assert response.status_code == 201
    retailer = response.json()
    assert len(retailer["verificationDocuments"]) == 1
    assert retailer["verificationStatus"] == "verified"


def test_add_document_with_unknown_type_is_400(client, verified_retailer):
    response = client.post(f"/retailers/{verified_retailer['id']}/documents", json=dict(GST_DOC, documentType="passport"))
    assert response.status_code == 400


def test_pending_and_verified_lists(client, retailer_payload):
    pending = client.post("/retailers/register", json=retailer_payload).json()
    assert [r["id"] for r in client.get("/retailers/pending").json()] == [pending["id"]]
    assert client.get("/retailers/verified").json() == []

    client.patch(f"/retailers/{pending['id']}/verification", json={"status": "verified"})
    assert client.get("/retailers/pending").json() == []
    assert [r["id"] for r in client.get("/retailers/verified").json()] == [pending["id"]]


def test_lookup_by_id_and_by_user(client, registered_user, verified_retailer):
    assert client.get(f"/retailers/{verified_retailer['id']}").json()["businessName"] == "Alice Grocers"
    assert client.get(f"/users/{registered_user['id']}/retailer").json()["id"] == verified_retailer["id"]
    assert client.get("/retailers/77").status_code == 404


def test_user_without_retailer_account(client, registered_user):
    response = client.get(f"/users/{registered_user['id']}/retailer")
    assert response.status_code == 404
    assert response.json()["message"] == "Retailer account not found for this user"


def test_update_retailer_business_details(client, verified_retailer):
    response = client.patch(f"/retailers/{verified_retailer['id']}", json={"businessCity": "Mumbai", "gstNumber": "27ABCDE1234F1Z5"})
    assert response.status_code == 200
    retailer = response.json()
    assert retailer["businessCity"] == "Mumbai"
    assert retailer["gstNumber"] == "27ABCDE1234F1Z5"
    assert retailer["verificationStatus"] == "verified"

    cleared = client.patch(f"/retailers/{verified_retailer['id']}", json={"gstNumber": None}).json()
    assert cleared["gstNumber"] is None


def test_rereview_moves_verified_back_to_pending(client, verified_retailer):
    response = client.patch(f"/retailers/{verified_retailer['id']}/verification", json={"status": "pending"})
    assert response.status_code == 200
    assert response.json()["verificationStatus"] == "pending"


def test_review_decisions_are_final_without_rereview(client, store, retailer_payload):
    retailer = client.post("/retailers/register", json=retailer_payload).json()
    helpers = RetailerHelpers(store, allow_rereview=False)
    helpers.set_verification_status(retailer["id"], "rejected")
    with pytest.raises(InvalidTransition):
        helpers.set_verification_status(retailer["id"], "verified")
    assert store.retailers.get(retailer["id"]).verification_status == "rejected"
