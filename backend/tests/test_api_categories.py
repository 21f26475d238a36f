"""Tests HTTP de gestión de categorías."""

from inventario.db.models.product_model import Product


async def test_create_category(client, admin_headers):
    response = await client.post("/api/v1/categories", json={"nombre": "  Lácteos "}, headers=admin_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["nombre"] == "Lácteos"
    assert data["idCategoria"] > 0


async def test_create_category_requires_name(client, admin_headers):
    response = await client.post("/api/v1/categories", json={"nombre": "   "}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "nombre es obligatorio."


async def test_create_category_name_too_long(client, admin_headers):
    response = await client.post("/api/v1/categories", json={"nombre": "c" * 101}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "nombre no debe exceder 100 caracteres."


async def test_employee_cannot_create_category(client, employee_headers):
    response = await client.post("/api/v1/categories", json={"nombre": "Bebidas"}, headers=employee_headers)
    assert response.status_code == 403


async def test_list_categories(client, category, employee_headers):
    response = await client.get("/api/v1/categories", headers=employee_headers)

    assert response.status_code == 200
    assert response.json()["data"] == {
        "categorias": [{"idCategoria": category.category_id, "nombre": "Abarrotes"}],
        "total": 1,
    }


async def test_list_categories_requires_token(client):
    response = await client.get("/api/v1/categories")
    assert response.status_code == 401


async def test_read_category(client, category, employee_headers):
    response = await client.get(f"/api/v1/categories/{category.category_id}", headers=employee_headers)

    assert response.status_code == 200
    assert response.json()["data"]["nombre"] == "Abarrotes"


async def test_read_missing_category(client, employee_headers):
    response = await client.get("/api/v1/categories/999", headers=employee_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Categoría no encontrada."


async def test_update_category(client, category, admin_headers):
    response = await client.put(
        f"/api/v1/categories/{category.category_id}", json={"nombre": "Despensa"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["data"]["nombre"] == "Despensa"


async def test_update_category_rejects_blank_name(client, category, admin_headers):
    response = await client.put(
        f"/api/v1/categories/{category.category_id}", json={"nombre": ""}, headers=admin_headers
    )
    assert response.status_code == 400


async def test_delete_category_keeps_products(client, products, category, admin_headers, employee_headers):
    response = await client.delete(f"/api/v1/categories/{category.category_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Categoría eliminada correctamente."

    cafe = await client.get(f"/api/v1/products/{products[0].product_id}", headers=employee_headers)
    assert cafe.status_code == 200
    assert cafe.json()["data"]["idCategoria"] is None

    missing = await client.get(f"/api/v1/categories/{category.category_id}", headers=employee_headers)
    assert missing.status_code == 404


async def test_delete_missing_category(client, admin_headers):
    response = await client.delete("/api/v1/categories/999", headers=admin_headers)
    assert response.status_code == 404


async def test_products_by_category(category, products, app, db):
    service = app.state.product_service

    in_category = await service.get_products_by_category(db, category.category_id)

    assert sorted(p.name for p in in_category) == ["Café", "Sal"]
    assert all(isinstance(p, Product) for p in in_category)


async def test_name_length_is_measured_after_trimming(client, admin_headers):
    name = "c" * 99
    response = await client.post("/api/v1/categories", json={"nombre": f"   {name}   "}, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["data"]["nombre"] == name
