"""
Tests for dungeon generation API endpoints.
"""

import sys
from pathlib import Path

# Add server directory to path
server_dir = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(server_dir))

import pytest
from fastapi.testclient import TestClient
from internal.dungeon.main import app, cfg
from internal.dungeon import seeds

client = TestClient(app)


def test_health_check():
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "dungeon-generation-service"
    assert data["version"] == "0.1.0"


def test_generate_chunk():
    """Test chunk generation endpoint"""
    request_data = {"chunk_x": 3, "chunk_y": -2, "world_seed": 12345}

    response = client.post("/api/v1/dungeons/chunks/generate", json=request_data)
    assert response.status_code == 200

    data = response.json()
    assert data["success"] is True
    assert data["chunk"]["chunk_id"] == "3_-2"
    assert data["chunk"]["chunk_x"] == 3
    assert data["chunk"]["chunk_y"] == -2
    assert data["chunk"]["world_seed"] == 12345
    assert data["chunk"]["chunk_seed"] == seeds.derive_seed(12345, seeds.Position(3, -2))
    assert data["chunk"]["size"] == 3

    assert len(data["rooms"]) == 9
    for room in data["rooms"]:
        assert room["index"] == room["x"] + 3 * room["y"]
        assert room["stairs"] in ["none", "down", "up"]
        assert set(room["doors"]) == {"north", "east", "south", "west"}
        for door in room["doors"].values():
            assert door in ["none", "open", "closed", "stuck", "locked"]

    # A connected 3x3 grid has at least 8 edges
    assert len(data["edges"]) >= 8
    for v, w in data["edges"]:
        assert v < w


def test_generate_chunk_deterministic():
    """Test identical requests return identical chunks"""
    request_data = {"chunk_x": 10, "chunk_y": 20, "world_seed": 99999}

    first = client.post("/api/v1/dungeons/chunks/generate", json=request_data).json()
    second = client.post("/api/v1/dungeons/chunks/generate", json=request_data).json()
    assert first == second


def test_generate_chunk_default_seed():
    """Test the configured world seed is used when none is given"""
    response = client.post(
        "/api/v1/dungeons/chunks/generate", json={"chunk_x": 0, "chunk_y": 0}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["chunk"]["world_seed"] == cfg.world_seed & seeds.MASK_64
    assert data["chunk"]["connect_probability"] == cfg.connect_probability


def test_generate_chunk_with_probability():
    """Test a full connect probability yields the full lattice"""
    response = client.post(
        "/api/v1/dungeons/chunks/generate",
        json={"chunk_x": 1, "chunk_y": 1, "connect_probability": 1.0},
    )
    assert response.status_code == 200
    # 2 * n * (n - 1) lattice edges for n = 3
    assert len(response.json()["edges"]) == 12


def test_generate_chunk_validation():
    """Test chunk generation endpoint validation"""
    # Coordinates outside the signed 32-bit range
    response = client.post(
        "/api/v1/dungeons/chunks/generate", json={"chunk_x": 2**31, "chunk_y": 0}
    )
    assert response.status_code == 422

    response = client.post(
        "/api/v1/dungeons/chunks/generate", json={"chunk_x": 0, "chunk_y": -(2**31) - 1}
    )
    assert response.status_code == 422

    # Probability outside [0, 1]
    response = client.post(
        "/api/v1/dungeons/chunks/generate",
        json={"chunk_x": 0, "chunk_y": 0, "connect_probability": 1.5},
    )
    assert response.status_code == 422

    # Missing coordinate
    response = client.post("/api/v1/dungeons/chunks/generate", json={"chunk_x": 0})
    assert response.status_code == 422


def test_get_chunk_seed():
    """Test chunk seed endpoint"""
    response = client.get("/api/v1/dungeons/chunks/seed/5/7?world_seed=12345")
    assert response.status_code == 200

    data = response.json()
    assert data["chunk_x"] == 5
    assert data["chunk_y"] == 7
    assert data["world_seed"] == 12345
    assert data["position_hash"] == (5 << 32) | 7
    assert data["chunk_seed"] == ((5 << 32) | 7) ^ 12345


def test_preview_chunk():
    """Test the plain-text lattice preview"""
    response = client.get("/api/v1/dungeons/chunks/2/3/preview?world_seed=1")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")

    lines = response.text.splitlines()
    # 3 vertex rows + 2 link rows
    assert len(lines) == 5
    assert lines[0].count("o") == 3


def test_preview_chunk_validation():
    """Test preview rejects invalid probabilities"""
    response = client.get("/api/v1/dungeons/chunks/0/0/preview?connect_probability=-1")
    assert response.status_code == 422


def test_chunk_seed_rejects_out_of_range_coordinates():
    """Test the seed endpoint refuses coordinates that would alias"""
    response = client.get("/api/v1/dungeons/chunks/seed/4294967296/3?world_seed=1")
    assert response.status_code == 422

    response = client.get(f"/api/v1/dungeons/chunks/seed/0/{-(2**31) - 1}")
    assert response.status_code == 422

    # Range limits themselves are accepted
    response = client.get(f"/api/v1/dungeons/chunks/seed/{2**31 - 1}/{-(2**31)}")
    assert response.status_code == 200


def test_preview_rejects_out_of_range_coordinates():
    """Test the preview endpoint refuses coordinates that would alias"""
    response = client.get("/api/v1/dungeons/chunks/4294967296/3/preview?world_seed=1")
    assert response.status_code == 422

    response = client.get(f"/api/v1/dungeons/chunks/1/{2**31}/preview")
    assert response.status_code == 422

    response = client.get("/api/v1/dungeons/chunks/0/0/preview?connect_probability=1.5")
    assert response.status_code == 422
