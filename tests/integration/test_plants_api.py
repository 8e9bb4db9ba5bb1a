"""
End-to-end tests for the plant routes over an in-memory SQLite store.
"""
import pytest
from httpx import ASGITransport, AsyncClient

from rareplants.core.domain.entities import create_plant
from rareplants.infrastructure.database.config import get_database_manager
from rareplants.infrastructure.database.repositories import SQLAlchemyPlantRepository
from rareplants.main import app
from rareplants.shared.types import WaterAmount


@pytest.fixture
async def client(db_manager):
    """FastAPI test client with the database manager overridden."""
    app.dependency_overrides[get_database_manager] = lambda: db_manager

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def seeded(db_manager):
    repo = SQLAlchemyPlantRepository(db_manager)
    return await repo.add(create_plant("Ghost Orchid", "Epiphyte", WaterAmount(120)))


class TestPlantsAPI:

    async def test_list_empty(self, client):
        response = await client.get("/api/v1/plants/")

        assert response.status_code == 200
        assert response.json() == []

    async def test_adopt_venus_flytrap_then_list(self, client):
        response = await client.post(
            "/api/v1/plants/adopt",
            json={"name": "Venus Flytrap", "type": "Carnivorous", "waterRequirement": 50},
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/api/v1/plants/"

        listing = (await client.get("/api/v1/plants/")).json()
        assert len(listing) == 1
        assert listing[0]["name"] == "Venus Flytrap"
        assert listing[0]["adoptionDate"] is not None
        assert "waterRequirement" not in listing[0]

    async def test_adopt_empty_name(self, client):
        body = {"name": "", "type": "Fern", "waterRequirement": 50}

        response = await client.post("/api/v1/plants/adopt", json=body)

        assert response.status_code == 422
        payload = response.json()
        assert payload["input"]["type"] == "Fern"
        assert payload["errors"] == {"name": ["name is required"]}
        assert (await client.get("/api/v1/plants/")).json() == []

    async def test_adopt_non_string_name_echoes_input(self, client):
        body = {"name": 5, "type": "Fern", "waterRequirement": 50}

        response = await client.post("/api/v1/plants/adopt", json=body)

        assert response.status_code == 422
        payload = response.json()
        assert payload["input"] == {"id": None, "name": 5, "type": "Fern", "waterRequirement": 50}
        assert payload["errors"] == {"name": ["name is required"]}
        assert (await client.get("/api/v1/plants/")).json() == []

    async def test_adopt_trailing_space_name_at_limit(self, client):
        body = {"name": "x" * 100 + " ", "type": "Fern", "waterRequirement": 50}

        response = await client.post("/api/v1/plants/adopt", json=body)

        assert response.status_code == 303
        listing = (await client.get("/api/v1/plants/")).json()
        assert listing[0]["name"] == "x" * 100

    async def test_adopt_water_out_of_range(self, client):
        body = {"name": "Orchid", "type": "Epiphyte", "waterRequirement": 2000}

        response = await client.post("/api/v1/plants/adopt", json=body)

        assert response.status_code == 422
        assert "waterRequirement" in response.json()["errors"]

    async def test_detail(self, client, seeded):
        response = await client.get(f"/api/v1/plants/{seeded.id}")

        assert response.status_code == 200
        assert response.json() == {
            "id": seeded.id,
            "name": "Ghost Orchid",
            "type": "Epiphyte",
            "adoptionDate": None,
        }

    async def test_detail_bad_id(self, client):
        response = await client.get("/api/v1/plants/0")

        assert response.status_code == 400
        assert response.json() == {"error": "invalid plant id"}

    async def test_detail_not_found(self, client):
        response = await client.get("/api/v1/plants/999")

        assert response.status_code == 404
        assert response.json() == {"error": "plant not found"}

    @pytest.mark.parametrize("path", ["/api/v1/plants/abc", "/api/v1/plants/abc/care", "/api/v1/plants/-1/care"])
    async def test_malformed_id_is_bad_request(self, client, path):
        response = await client.get(path)

        assert response.status_code == 400
        assert response.json() == {"error": "invalid plant id"}

    @pytest.mark.parametrize("suffix", ["", "/care"])
    async def test_id_beyond_column_range_is_not_found(self, client, suffix):
        response = await client.get(f"/api/v1/plants/99999999999999999999{suffix}")

        assert response.status_code == 404
        assert response.json() == {"error": "plant not found"}

    async def test_care_info(self, client, seeded):
        response = await client.get(f"/api/v1/plants/{seeded.id}/care")

        assert response.status_code == 200
        assert response.json()["waterRequirement"] == 120

    async def test_adopt_existing_id_inserts_new_record(self, client, seeded):
        body = {"id": seeded.id, "name": "Ghost Orchid", "type": "Epiphyte", "waterRequirement": 120}

        await client.post("/api/v1/plants/adopt", json=body)
        await client.post("/api/v1/plants/adopt", json=body)

        listing = (await client.get("/api/v1/plants/")).json()
        assert len(listing) == 3
        assert len({item["id"] for item in listing}) == 3
        original = (await client.get(f"/api/v1/plants/{seeded.id}")).json()
        assert original["adoptionDate"] is None

    async def test_correlation_id_echoed(self, client):
        response = await client.get("/api/v1/plants/", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"

    async def test_health(self, client):
        response = await client.get("/api/v1/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
