import pytest


def test_bytes_returns_requested_size(client):
    response = client.get("/bytes", params={"size": 100})

    assert response.status_code == 200
    assert response.text == "A" * 100
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers["content-length"] == "100"


def test_bytes_zero_is_empty(client):
    response = client.get("/bytes", params={"size": 0})

    assert response.status_code == 200
    assert response.text == ""


@pytest.mark.parametrize(
    "params, error",
    [
        ({}, "Missing required query parameter: size"),
        ({"size": "abc"}, "Invalid size parameter. Must be a non-negative integer."),
        ({"size": "-5"}, "Invalid size parameter. Must be a non-negative integer."),
        ({"size": "1000001"}, "Size parameter too large. Maximum allowed: 1000000"),
    ],
)
def test_bytes_rejects_bad_sizes(client, params, error):
    response = client.get("/bytes", params=params)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": error}
