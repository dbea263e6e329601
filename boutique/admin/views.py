"""
Panneau d'administration (HTTP Basic via require_admin).
- Produits: liste, création, édition, suppression (redirect-after-write)
- Commandes: liste des commandes Stripe (pending/paid)
En cas d'erreur de validation ou de stockage, le formulaire (ou la liste pour une suppression)
est ré-affiché avec un message. Le SKU n'est jamais modifié après création.
"""
from typing import Any, Callable, Dict, Optional
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.datastructures import UploadFile
from starlette.status import HTTP_303_SEE_OTHER

from boutique.admin import service as admin_service
from boutique.catalog.models import Gender, ProductInput
from boutique.catalog.repository import ProductRepository, get_product_repository
from boutique.config import Settings, get_settings
from boutique.errors import InvalidProductForm, StorageError
from boutique.orders.repository import OrderRepository, get_order_repository
from boutique.uploads.service import UPLOAD_FIELD, discard_upload, store_upload
from boutique.utils.security import require_admin
from boutique.utils.templates import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])

EMPTY_VALUES: Dict[str, Any] = {
    "sku": "",
    "name": "",
    "gender": Gender.UNISEXE.value,
    "price": admin_service.DEFAULT_PRICE,
    "image": "",
    "default_size": admin_service.DEFAULT_SIZE,
}


def _redirect_admin() -> RedirectResponse:
    return RedirectResponse(url="/admin", status_code=HTTP_303_SEE_OTHER)


def _render_form(request: Request, *, mode: str, action_url: str, values: Dict[str, Any], msg: Optional[str], status_code: int = 200):
    return templates.TemplateResponse(request, "admin_form.html", {
        "mode": mode,
        "action_url": action_url,
        "values": values,
        "genders": [g.value for g in Gender],
        "msg": msg,
    }, status_code=status_code)


def _save_upload(form, settings: Settings) -> Optional[str]:
    upload = form.get(UPLOAD_FIELD)
    if not isinstance(upload, UploadFile) or not upload.filename:
        return None
    return store_upload(upload.filename, upload.file, upload_dir=settings.upload_dir)


def _write_product(form, settings: Settings, write: Callable[[ProductInput], Any], *, sku: Optional[str] = None):
    """
    Valide le formulaire, stocke l'image éventuelle puis écrit le produit.
    Si l'écriture échoue, le fichier téléversé est supprimé.
    """
    data = admin_service.parse_product_form(form, sku=sku)
    image = _save_upload(form, settings)
    if image:
        data = data.model_copy(update={"image": image})
    try:
        return write(data)
    except StorageError:
        if image:
            discard_upload(image, upload_dir=settings.upload_dir)
        raise


def _render_list(request: Request, products: ProductRepository, msg: Optional[str] = None, status_code: int = 200):
    return templates.TemplateResponse(request, "admin_list.html", {
        "products": products.list_recent(),
        "msg": msg,
    }, status_code=status_code)


# module boutique.admin.views
@router.get("", response_class=HTMLResponse)
@router.get("/", response_class=HTMLResponse)
def admin_list(request: Request, products: ProductRepository = Depends(get_product_repository)):
    return _render_list(request, products)


@router.get("/orders", response_class=HTMLResponse)
def admin_orders(request: Request, orders: OrderRepository = Depends(get_order_repository)):
    return templates.TemplateResponse(request, "admin_orders.html", {"orders": orders.list_recent()})


@router.get("/new", response_class=HTMLResponse)
def admin_new_form(request: Request):
    return _render_form(request, mode="create", action_url="/admin/new", values=dict(EMPTY_VALUES), msg=None)


@router.post("/new")
async def admin_create(
    request: Request,
    settings: Settings = Depends(get_settings),
    products: ProductRepository = Depends(get_product_repository),
):
    form = await request.form()
    values = {**EMPTY_VALUES, **{k: v for k, v in form.items() if isinstance(v, str)}}
    try:
        _write_product(form, settings, lambda data: admin_service.create_product(products, data))
    except (InvalidProductForm, StorageError) as e:
        return _render_form(request, mode="create", action_url="/admin/new", values=values,
                            msg=f"Erreur: {e.message}", status_code=e.status_code)
    return _redirect_admin()


@router.get("/edit/{product_id}", response_class=HTMLResponse)
def admin_edit_form(request: Request, product_id: int, products: ProductRepository = Depends(get_product_repository)):
    product = products.get_by_id(product_id)
    if not product:
        return _redirect_admin()
    return _render_form(request, mode="edit", action_url=f"/admin/edit/{product_id}",
                        values=product.model_dump(mode="json"), msg=None)


@router.post("/edit/{product_id}")
async def admin_update(
    request: Request,
    product_id: int,
    settings: Settings = Depends(get_settings),
    products: ProductRepository = Depends(get_product_repository),
):
    product = products.get_by_id(product_id)
    if not product:
        return _redirect_admin()
    form = await request.form()
    try:
        # Le SKU est la clé du checkout: celui du formulaire est ignoré
        _write_product(form, settings, lambda data: admin_service.update_product(products, product_id, data),
                       sku=product.sku)
    except (InvalidProductForm, StorageError) as e:
        values = product.model_dump(mode="json")
        values.update({k: v for k, v in form.items() if isinstance(v, str)})
        values["sku"] = product.sku
        return _render_form(request, mode="edit", action_url=f"/admin/edit/{product_id}", values=values,
                            msg=f"Erreur: {e.message}", status_code=e.status_code)
    return _redirect_admin()


@router.post("/delete/{product_id}")
def admin_delete(request: Request, product_id: int, products: ProductRepository = Depends(get_product_repository)):
    if not products.delete(product_id):
        logger.warning("admin.delete failed id=%s", product_id)
        return _render_list(request, products, msg="Erreur: suppression impossible", status_code=500)
    return _redirect_admin()
