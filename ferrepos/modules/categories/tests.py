"""
Tests del módulo de categorías
"""

from conftest import register_tenant


def _first_category(client, headers):
    return client.get("/categories/", headers=headers).json()["categories"][0]


class TestCategories:

    def test_create_and_get(self, client, auth_headers):
        response = client.post("/categories/", json={"name": "Adhesivos", "description": "Colas y siliconas"},
                               headers=auth_headers)
        assert response.status_code == 201
        category = response.json()

        response = client.get(f"/categories/{category['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Adhesivos"

    def test_duplicate_name_is_case_insensitive(self, client, auth_headers):
        response = client.post("/categories/", json={"name": "pinturas"}, headers=auth_headers)
        assert response.status_code == 409

    def test_update(self, client, auth_headers):
        category = _first_category(client, auth_headers)
        response = client.patch(f"/categories/{category['id']}", json={"description": "Actualizada"},
                                headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["description"] == "Actualizada"

    def test_rename_to_existing(self, client, auth_headers):
        categories = client.get("/categories/", headers=auth_headers).json()["categories"]
        response = client.patch(f"/categories/{categories[0]['id']}", json={"name": categories[1]["name"]},
                                headers=auth_headers)
        assert response.status_code == 409

    def test_delete_empty_category(self, client, auth_headers):
        category = _first_category(client, auth_headers)
        response = client.delete(f"/categories/{category['id']}", headers=auth_headers)
        assert response.status_code == 204
        assert client.get(f"/categories/{category['id']}", headers=auth_headers).status_code == 404

    def test_delete_category_with_products(self, client, auth_headers, make_product):
        category = _first_category(client, auth_headers)
        make_product(category_id=category["id"])

        response = client.delete(f"/categories/{category['id']}", headers=auth_headers)
        assert response.status_code == 409

    def test_tenant_isolation(self, client, auth_headers):
        other = register_tenant(client, name="Otra Ferretería", email="otra@example.com")
        other_headers = {"Authorization": f"Bearer {other['access_token']}"}

        category = _first_category(client, auth_headers)
        response = client.get(f"/categories/{category['id']}", headers=other_headers)
        assert response.status_code == 404
