"""API integration tests."""

import uuid

from fastapi.testclient import TestClient
from sqlmodel import Session

from app.models import Person, Relationship
from app.ontology import Gender, RelationshipCode


def add_person(session: Session, first_name: str, gender: Gender = Gender.MALE) -> Person:
    person = Person(first_name=first_name, gender=gender)
    session.add(person)
    session.commit()
    session.refresh(person)
    return person


def test_health_endpoint(client: TestClient):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_resolve_recognized_label(client: TestClient):
    """Test resolving a known label."""
    response = client.get("/api/kinship/resolve", params={"label": "  Двоюродная сестра "})
    assert response.status_code == 200
    data = response.json()
    assert data["recognized"] is True
    assert data["relationship_code"] == "cousin"
    assert data["specific_value"] == "cousin_f_1st"
    assert "options" not in data


def test_resolve_unrecognized_label_offers_options(client: TestClient):
    """Test an unknown label is a normal response with structured options."""
    response = client.get("/api/kinship/resolve", params={"label": "коллега"})
    assert response.status_code == 200
    data = response.json()
    assert data["recognized"] is False
    assert data["relationship_code"] is None
    assert len(data["options"]) == 8
    assert {"code": "parent", "label": "Родитель", "category": "direct"} in data["options"]


def test_resolve_english_locale(client: TestClient):
    response = client.get("/api/kinship/resolve", params={"label": "Grandma", "locale": "en"})
    data = response.json()
    assert data["relationship_code"] == "grandparent"
    assert data["specific_value"] == "grandmother"


def test_generate_label(client: TestClient):
    response = client.get(
        "/api/kinship/label",
        params={"code": "cousin", "gender": "female", "cousin_degree": 2},
    )
    assert response.status_code == 200
    assert response.json()["label"] == "троюродная сестра"

    response = client.get(
        "/api/kinship/label",
        params={"code": "sibling", "gender": "male", "halfness": "half", "lineage": "maternal", "locale": "en"},
    )
    assert response.json()["label"] == "half-brother (maternal)"


def test_specific_options(client: TestClient):
    response = client.get("/api/kinship/options/aunt_uncle")
    assert response.status_code == 200
    values = [option["value"] for option in response.json()["options"]]
    assert values == ["uncle", "aunt", "uncle_2nd", "aunt_2nd"]

    response = client.get("/api/kinship/options/spouse")
    assert response.status_code == 404


def test_compose(client: TestClient):
    response = client.get(
        "/api/kinship/compose", params={"via": "parent", "then": "sibling", "gender": "female"}
    )
    data = response.json()
    assert data["recognized"] is True
    assert data["relationship_code"] == "aunt_uncle"
    assert data["specific_value"] == "aunt"

    response = client.get("/api/kinship/compose", params={"via": "cousin", "then": "parent"})
    assert response.json()["recognized"] is False


def test_create_and_get_person(client: TestClient):
    """Test person creation and retrieval."""
    response = client.post(
        "/api/person", json={"first_name": "Anna", "last_name": "Petrova", "gender": "female"}
    )
    assert response.status_code == 201
    person_id = response.json()["person_id"]

    response = client.get(f"/api/person/{person_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["display_name"] == "Anna Petrova"
    assert data["gender"] == "female"
    assert data["is_active"] is True


def test_get_missing_person(client: TestClient):
    response = client.get(f"/api/person/{uuid.uuid4()}")
    assert response.status_code == 404


def test_create_relationship_from_label(client: TestClient, session: Session):
    """Test a free-text label is resolved and stored."""
    me = add_person(session, "Ivan")
    aunt = add_person(session, "Maria", Gender.FEMALE)

    response = client.post(
        "/api/relationships",
        json={"from_person_id": str(me.person_id), "to_person_id": str(aunt.person_id), "label": "Тётя Маша"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["relationship_code"] == "aunt_uncle"
    assert data["specific_value"] == "aunt"
    assert data["source_label"] == "Тётя Маша"

    response = client.get(f"/api/relationships/{data['relationship_id']}")
    assert response.status_code == 200


def test_create_relationship_unrecognized_label(client: TestClient, session: Session):
    """Test an unrecognized label is rejected with the structured options."""
    me = add_person(session, "Ivan")
    other = add_person(session, "Petr")

    response = client.post(
        "/api/relationships",
        json={"from_person_id": str(me.person_id), "to_person_id": str(other.person_id), "label": "коллега"},
    )
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["label"] == "коллега"
    assert len(detail["options"]) == 8


def test_create_relationship_structured(client: TestClient, session: Session):
    me = add_person(session, "Ivan")
    brother = add_person(session, "Oleg")

    response = client.post(
        "/api/relationships",
        json={
            "from_person_id": str(me.person_id),
            "to_person_id": str(brother.person_id),
            "relationship_code": "sibling",
            "specific_value": "half_brother_p",
        },
    )
    assert response.status_code == 201
    assert response.json()["specific_value"] == "half_brother_p"

    response = client.post(
        "/api/relationships",
        json={
            "from_person_id": str(me.person_id),
            "to_person_id": str(brother.person_id),
            "relationship_code": "sibling",
            "specific_value": "aunt",
        },
    )
    assert response.status_code == 400


def test_create_relationship_validation(client: TestClient, session: Session):
    me = add_person(session, "Ivan")
    other = add_person(session, "Petr")

    response = client.post(
        "/api/relationships",
        json={"from_person_id": str(me.person_id), "to_person_id": str(me.person_id), "label": "брат"},
    )
    assert response.status_code == 400

    response = client.post(
        "/api/relationships",
        json={"from_person_id": str(me.person_id), "to_person_id": str(uuid.uuid4()), "label": "брат"},
    )
    assert response.status_code == 404

    response = client.post(
        "/api/relationships",
        json={"from_person_id": str(me.person_id), "to_person_id": str(other.person_id)},
    )
    assert response.status_code == 400


def test_delete_relationship(client: TestClient, session: Session):
    me = add_person(session, "Ivan")
    father = add_person(session, "Sergei")
    rel = Relationship(
        from_person_id=me.person_id,
        to_person_id=father.person_id,
        relationship_code=RelationshipCode.PARENT,
        specific_value="father",
    )
    session.add(rel)
    session.commit()
    session.refresh(rel)

    response = client.delete(f"/api/relationships/{rel.relationship_id}")
    assert response.status_code == 204

    response = client.get(f"/api/relationships/{rel.relationship_id}")
    assert response.status_code == 404


def test_get_person_relationships(client: TestClient, session: Session):
    """Test relationships are reported from the requested person's side."""
    me = add_person(session, "Ivan")
    father = add_person(session, "Sergei")
    session.add(
        Relationship(
            from_person_id=me.person_id,
            to_person_id=father.person_id,
            relationship_code=RelationshipCode.PARENT,
            specific_value="father",
        )
    )
    session.commit()

    data = client.get(f"/api/person/{me.person_id}/relationships").json()
    assert data["total_relationships"] == 1
    assert data["relationships"]["parent"][0]["person_id"] == str(father.person_id)
    assert data["relationships"]["parent"][0]["specific_value"] == "father"

    data = client.get(f"/api/person/{father.person_id}/relationships").json()
    assert data["relationships"]["child"][0]["person_id"] == str(me.person_id)
    assert data["relationships"]["child"][0]["specific_value"] is None


def test_relationship_path_and_lineage(client: TestClient, session: Session):
    """Test path finding and lineage over stored relationships."""
    me = add_person(session, "Ivan")
    father = add_person(session, "Sergei")
    grandfather = add_person(session, "Pavel")
    uncle = add_person(session, "Nikolai")
    cousin = add_person(session, "Olga", Gender.FEMALE)

    for from_person, to_person, code in [
        (me, father, RelationshipCode.PARENT),
        (father, grandfather, RelationshipCode.PARENT),
        (grandfather, uncle, RelationshipCode.CHILD),
        (uncle, cousin, RelationshipCode.CHILD),
    ]:
        session.add(
            Relationship(
                from_person_id=from_person.person_id,
                to_person_id=to_person.person_id,
                relationship_code=code,
            )
        )
    session.commit()

    response = client.get(
        "/api/graph/path",
        params={"from_id": str(me.person_id), "to_id": str(cousin.person_id), "locale": "en"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["found"] is True
    assert data["path_length"] == 4
    assert [step["first_name"] for step in data["path"]] == ["Ivan", "Sergei", "Pavel", "Nikolai", "Olga"]
    assert data["relationship"]["label"] == "1st cousin"
    assert data["relationship"]["category"] == "cousin"
    assert data["separation"] == "4th degree"

    response = client.get(f"/api/graph/lineage/{me.person_id}", params={"depth": 2})
    assert response.status_code == 200
    data = response.json()
    assert data["total_nodes"] == 3
    assert data["total_edges"] == 2
    assert data["nodes"][0]["is_root"] is True

    response = client.get(f"/api/graph/lineage/{uuid.uuid4()}")
    assert response.status_code == 404


def test_relationship_path_not_found(client: TestClient, session: Session):
    a = add_person(session, "Ivan")
    b = add_person(session, "Petr")

    data = client.get(
        "/api/graph/path", params={"from_id": str(a.person_id), "to_id": str(b.person_id)}
    ).json()
    assert data["found"] is False
    assert data["path"] == []
    assert data["relationship"]["degree"] == -1
    assert data["separation"] is None


def test_create_relationship_label_conflicts_with_code(client: TestClient, session: Session):
    """Test a label and a structured code that disagree are rejected."""
    me = add_person(session, "Ivan")
    aunt = add_person(session, "Maria", Gender.FEMALE)

    response = client.post(
        "/api/relationships",
        json={
            "from_person_id": str(me.person_id),
            "to_person_id": str(aunt.person_id),
            "label": "тётя",
            "relationship_code": "parent",
        },
    )
    assert response.status_code == 400

    response = client.post(
        "/api/relationships",
        json={
            "from_person_id": str(me.person_id),
            "to_person_id": str(aunt.person_id),
            "label": "тётя",
            "relationship_code": "aunt_uncle",
            "specific_value": "aunt",
        },
    )
    assert response.status_code == 201


def test_timestamps_are_timezone_aware(client: TestClient):
    """Test stored timestamps carry a timezone."""
    person = Person(first_name="Ivan")
    assert person.created_at.tzinfo is not None

    response = client.post("/api/person", json={"first_name": "Ivan"})
    assert response.status_code == 201
    person_id = response.json()["person_id"]

    response = client.get(f"/api/person/{person_id}")
    assert response.status_code == 200
    assert response.json()["created_at"]


def test_server_runs_app_with_uvicorn(monkeypatch):
    """Test the server entry point hands the app to uvicorn."""
    import app.server
    from app.config import settings

    calls = []
    monkeypatch.setattr(app.server.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))

    app.server.run()

    assert calls == [
        (
            "app.main:app",
            {
                "host": settings.host,
                "port": settings.port,
                "reload": settings.debug,
                "log_level": settings.log_level.lower(),
            },
        )
    ]
