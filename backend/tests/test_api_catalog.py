"""Tests HTTP del catálogo público y del catálogo de empleados."""


async def test_public_catalog_lists_only_active_products(client, products):
    response = await client.get("/api/v1/catalog", params={"ordenarPor": "precio", "orden": "asc"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["timestamp"].endswith("Z")
    data = body["data"]
    assert [p["nombre"] for p in data["productos"]] == ["Azúcar", "Café"]
    assert data["total"] == 2
    assert data["pagina"] == 1
    assert data["totalPaginas"] == 1


async def test_public_catalog_pagination(client, products):
    response = await client.get(
        "/api/v1/catalog", params={"ordenarPor": "precio", "limit": "1", "page": "2"}
    )

    data = response.json()["data"]
    assert [p["nombre"] for p in data["productos"]] == ["Café"]
    assert data["total"] == 2
    assert data["totalPaginas"] == 2


async def test_public_catalog_product_fields(client, products):
    response = await client.get("/api/v1/catalog", params={"categoria": str(products[0].category_id)})

    (product,) = response.json()["data"]["productos"]
    assert product == {
        "idProducto": products[0].product_id,
        "nombre": "Café",
        "precio": 10.0,
        "stockActual": 8,
        "stockMinimo": 2,
        "esPromocion": False,
        "activo": True,
        "descripcion": None,
        "urlImagen": "/images/default-product.svg",
        "idCategoria": products[0].category_id,
    }


async def test_public_catalog_discards_invalid_parameters(client, products):
    response = await client.get(
        "/api/v1/catalog",
        params={"precioMin": "abc", "precioMax": "-3", "page": "0", "limit": "x", "ordenarPor": "stock", "orden": "up"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert [p["nombre"] for p in data["productos"]] == ["Azúcar", "Café"]
    assert data["pagina"] == 1


async def test_public_catalog_promotion_filter(client, products):
    response = await client.get("/api/v1/catalog", params={"esPromocion": "true"})

    assert [p["nombre"] for p in response.json()["data"]["productos"]] == ["Azúcar"]


async def test_public_catalog_empty_store(client):
    response = await client.get("/api/v1/catalog", params={"page": "3"})

    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {"productos": [], "total": 0, "pagina": 1, "totalPaginas": 0}
    assert body["message"] == "No hay productos disponibles actualmente."


async def test_public_product_detail(client, products):
    response = await client.get(f"/api/v1/catalog/{products[0].product_id}")

    assert response.status_code == 200
    assert response.json()["data"]["nombre"] == "Café"


async def test_public_product_detail_hides_inactive(client, products):
    response = await client.get(f"/api/v1/catalog/{products[2].product_id}")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None
    assert body["message"] == "Este producto ya no está disponible."


async def test_public_product_detail_invalid_id(client):
    response = await client.get("/api/v1/catalog/abc")

    assert response.status_code == 400
    assert response.json()["message"] == "id inválido o no proporcionado."


async def test_employee_catalog_requires_token(client, products):
    response = await client.get("/api/v1/products")

    assert response.status_code == 401
    assert response.json()["message"] == "No se proporcionó access token"


async def test_employee_catalog_rejects_customers(client, products, customer_headers):
    response = await client.get("/api/v1/products", headers=customer_headers)

    assert response.status_code == 403


async def test_employee_catalog_includes_inactive(client, products, employee_headers):
    response = await client.get("/api/v1/products", headers=employee_headers)

    data = response.json()["data"]
    assert [p["nombre"] for p in data["productos"]] == ["Azúcar", "Café", "Sal"]
    assert data["total"] == 3


async def test_employee_catalog_active_filter(client, products, employee_headers):
    response = await client.get("/api/v1/products", params={"activo": "false"}, headers=employee_headers)

    data = response.json()["data"]
    assert [p["nombre"] for p in data["productos"]] == ["Sal"]
    assert data["total"] == 1


async def test_employee_catalog_name_filter_and_stock_sort(client, products, employee_headers):
    response = await client.get(
        "/api/v1/products",
        params={"nombre": "a", "ordenarPor": "stock", "orden": "desc"},
        headers=employee_headers,
    )

    assert [p["nombre"] for p in response.json()["data"]["productos"]] == ["Azúcar", "Café", "Sal"]


async def test_employee_catalog_accepts_cookie_token(client, products, employee_headers):
    token = employee_headers["Authorization"].split(" ", 1)[1]
    client.cookies.set("accessToken", token)

    response = await client.get("/api/v1/products")

    assert response.status_code == 200
