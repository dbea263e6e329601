"""
Pages publiques du catalogue.
- GET /: liste filtrée/triée (q, gender, sort)
- GET /product/{sku}: fiche produit, 404 si SKU inconnu
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from boutique.catalog.models import ALL_GENDERS, Gender, SortKey
from boutique.catalog.repository import ProductRepository, get_product_repository
from boutique.catalog.view import build_catalog_view
from boutique.utils.templates import render_not_found, templates

router = APIRouter(tags=["Catalogue"])

SORT_LABELS = {
    SortKey.NAME_ASC.value: "Nom A → Z",
    SortKey.NAME_DESC.value: "Nom Z → A",
    SortKey.PRICE_ASC.value: "Prix croissant",
    SortKey.PRICE_DESC.value: "Prix décroissant",
}


@router.get("/", response_class=HTMLResponse)
def catalog_page(
    request: Request,
    q: str = "",
    gender: str = ALL_GENDERS,
    sort: str = SortKey.NAME_ASC.value,
    products: ProductRepository = Depends(get_product_repository),
):
    rows = build_catalog_view(products.list_by_name(), q=q, gender=gender, sort=sort)
    return templates.TemplateResponse(request, "index.html", {
        "products": rows,
        "q": q.strip().lower(),
        "gender": gender,
        "sort": sort,
        "genders": [ALL_GENDERS] + [g.value for g in Gender],
        "sort_labels": SORT_LABELS,
    })


@router.get("/product/{sku}", response_class=HTMLResponse)
def product_page(
    request: Request,
    sku: str,
    products: ProductRepository = Depends(get_product_repository),
):
    product = products.get_by_sku(sku)
    if not product:
        return render_not_found(request)
    return templates.TemplateResponse(request, "product.html", {"p": product})
