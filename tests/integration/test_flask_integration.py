import pytest

from request_params.api.flask_integration import tree_from_request


@pytest.mark.integration
def test_query_parameters_are_coerced(client) -> None:
    response = client.get("/books", query_string={"exclusive_1": "1", "page": "3", "sort": "DESC"})

    assert response.status_code == 200
    assert response.get_json() == {"page": 3, "sort": "desc", "tags": None}


@pytest.mark.integration
def test_repeated_query_keys_become_arrays(client) -> None:
    response = client.get("/books?exclusive_2=x&tags=a&tags=b")

    assert response.status_code == 200
    assert response.get_json()["tags"] == ["a", "b"]


@pytest.mark.integration
def test_invalid_parameter_returns_400(client) -> None:
    response = client.get("/books", query_string={"exclusive_1": "1", "sort": "foo"})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["param"] == "sort"
    assert payload["message"] == 'Parameter sort must be within ["asc", "desc"]'
    assert payload["options"] == {"in": ["asc", "desc"], "default": "asc", "transform": "downcase"}


@pytest.mark.integration
def test_group_violation_returns_400(client) -> None:
    response = client.get("/books", query_string={"exclusive_1": "1", "exclusive_2": "2"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Parameters exclusive_1, exclusive_2 are mutually exclusive"


@pytest.mark.integration
def test_json_body_is_validated(client) -> None:
    response = client.post("/books", json={"book": {"title": "Dune", "price": "$1,000.00"}})

    assert response.status_code == 200
    assert response.get_json() == {"title": "Dune", "price": "1000.00"}


@pytest.mark.integration
def test_json_body_missing_nested_field(client) -> None:
    response = client.post("/books", json={"book": {"price": "10"}})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["param"] == "title"
    assert payload["options"] == {"required": True}
    assert payload["message"] == "Parameter title is required"


@pytest.mark.integration
def test_form_fields_override_query(app) -> None:
    with app.test_request_context("/books?page=1&sort=asc", method="POST", data={"page": "2"}):
        assert tree_from_request() == {"page": "2", "sort": "asc"}
