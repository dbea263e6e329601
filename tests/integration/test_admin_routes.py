from boutique.catalog.models import Gender


def test_admin_requires_credentials(client, products):
    r = client.get("/admin")
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == 'Basic realm="Chogan Admin"'

    r = client.get("/admin/orders", auth=("admin", "wrong"))
    assert r.status_code == 401


def test_admin_writes_are_rejected_before_any_side_effect(client, products):
    r = client.post("/admin/new", data={"sku": "HACK", "name": "Hack"})
    assert r.status_code == 401
    assert products.get_by_sku("HACK") is None

    r = client.post("/admin/delete/1", auth=("admin", "wrong"))
    assert r.status_code == 401
    assert products.get_by_id(1) is not None


def test_admin_list_and_no_cache(client, admin_auth):
    r = client.get("/admin", auth=admin_auth)
    assert r.status_code == 200
    assert "Ambre Nuit" in r.text
    assert "no-store" in r.headers["Cache-Control"]


def test_admin_orders_page(client, admin_auth, orders):
    client.post("/api/checkout", json={"items": [{"sku": "A", "qty": 2}]})
    r = client.get("/admin/orders", auth=admin_auth)
    assert r.status_code == 200
    assert "cs_test_1" in r.text
    assert "pending" in r.text


def test_admin_create_product(client, admin_auth, products):
    assert client.get("/admin/new", auth=admin_auth).status_code == 200

    r = client.post(
        "/admin/new",
        data={"sku": "N1", "name": "Nouveau", "gender": "Femme", "price": "19,90", "default_size": ""},
        auth=admin_auth,
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert r.headers["location"] == "/admin"

    created = products.get_by_sku("N1")
    assert created.gender is Gender.FEMME
    assert created.price == 19.9
    assert created.default_size == "70 ml"


def test_admin_create_with_upload(client, admin_auth, products, settings):
    r = client.post(
        "/admin/new",
        data={"sku": "U1", "name": "Avec Image"},
        files={"imageFile": ("Mon Flacon.PNG", b"\x89PNG fake", "image/png")},
        auth=admin_auth,
        follow_redirects=False,
    )
    assert r.status_code == 303

    image = products.get_by_sku("U1").image
    assert image.startswith("/uploads/mon-flacon-")
    assert image.endswith(".png")
    stored = settings.upload_dir / image.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"\x89PNG fake"


def test_admin_create_invalid_form_is_redisplayed(client, admin_auth, products):
    r = client.post("/admin/new", data={"sku": "X", "name": ""}, auth=admin_auth)
    assert r.status_code == 400
    assert "Erreur: SKU et nom requis" in r.text
    assert products.get_by_sku("X") is None


def test_admin_create_storage_error_is_redisplayed(client, admin_auth, products):
    products.fail_writes = True
    r = client.post("/admin/new", data={"sku": "A", "name": "Doublon"}, auth=admin_auth)
    assert r.status_code == 500
    assert "Erreur: duplicate key" in r.text


def test_admin_edit_product(client, admin_auth, products):
    r = client.get("/admin/edit/1", auth=admin_auth)
    assert r.status_code == 200
    assert "Ambre Nuit" in r.text

    r = client.post(
        "/admin/edit/1",
        data={"sku": "A", "name": "Ambre Nuit Intense", "gender": "Homme", "price": "59.90"},
        auth=admin_auth,
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert products.get_by_id(1).name == "Ambre Nuit Intense"
    assert products.get_by_id(1).price == 59.9


def test_admin_edit_invalid_price_keeps_product(client, admin_auth, products):
    r = client.post("/admin/edit/1", data={"sku": "A", "name": "Ambre", "price": "gratuit"}, auth=admin_auth)
    assert r.status_code == 400
    assert "Erreur: Prix invalide" in r.text
    assert products.get_by_id(1).name == "Ambre Nuit"


def test_admin_edit_unknown_product_redirects(client, admin_auth):
    r = client.get("/admin/edit/999", auth=admin_auth, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/admin"


def test_admin_delete_product(client, admin_auth, products):
    r = client.post("/admin/delete/2", auth=admin_auth, follow_redirects=False)
    assert r.status_code == 303
    assert products.get_by_id(2) is None


def test_admin_edit_keeps_stored_sku(client, admin_auth, products):
    r = client.post(
        "/admin/edit/1",
        data={"sku": "RENAMED", "name": "Ambre Nuit"},
        auth=admin_auth,
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert products.get_by_id(1).sku == "A"
    assert products.get_by_sku("A") is not None
    assert products.get_by_sku("RENAMED") is None


def test_admin_edit_form_shows_sku_read_only(client, admin_auth):
    r = client.get("/admin/edit/1", auth=admin_auth)
    assert 'value="A" required readonly' in r.text
    assert "readonly" not in client.get("/admin/new", auth=admin_auth).text


def test_admin_edit_unknown_product_post_redirects(client, admin_auth, products):
    r = client.post("/admin/edit/999", data={"sku": "Z", "name": "Z"}, auth=admin_auth, follow_redirects=False)
    assert r.status_code == 303
    assert products.get_by_sku("Z") is None


def test_admin_delete_failure_is_reported(client, admin_auth, products):
    products.fail_writes = True
    r = client.post("/admin/delete/2", auth=admin_auth, follow_redirects=False)
    assert r.status_code == 500
    assert "Erreur: suppression impossible" in r.text
    assert "Bois de Santal" in r.text
    assert products.get_by_id(2) is not None


def test_admin_upload_is_removed_when_write_fails(client, admin_auth, products, settings):
    products.fail_writes = True
    r = client.post(
        "/admin/new",
        data={"sku": "U2", "name": "Orpheline"},
        files={"imageFile": ("orpheline.png", b"png", "image/png")},
        auth=admin_auth,
    )
    assert r.status_code == 500
    assert "Erreur:" in r.text
    assert list(settings.upload_dir.iterdir()) == []
