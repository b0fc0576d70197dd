from typing import Optional

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile
from sqlalchemy.orm import Session

from app.core.errors import NotFound
from app.dependencies import get_db, get_history_actor
from app.schemas.history import InventoryHistoryRead
from app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from app.services.export_service import export_products
from app.services.history_service import list_history
from app.services.import_service import import_upload
from app.services.product_service import (
    create_product,
    delete_product,
    get_product,
    list_products,
    search_products,
    update_product,
)

router = APIRouter(prefix="/products", tags=["Products"])

_MAX_PRODUCT_ID = 2**63 - 1


def _product_payload(product):
    return ProductRead.model_validate(product).model_dump(mode="json")


def _to_product_id(value: str) -> Optional[int]:
    # malformed or out-of-range ids match no product
    if not (value.isascii() and value.isdigit()) or int(value) > _MAX_PRODUCT_ID:
        return None
    return int(value)


def _require_product_id(value: str) -> int:
    product_id = _to_product_id(value)
    if product_id is None:
        raise NotFound()
    return product_id


@router.get("")
def get_all_products(db: Session = Depends(get_db)):
    products = list_products(db)
    return {"success": True, "data": [_product_payload(product) for product in products]}


@router.get("/search")
def search(
    name: Optional[str] = Query(None, description="Case-insensitive name fragment"),
    db: Session = Depends(get_db),
):
    products = search_products(db, name)
    return {"success": True, "data": [_product_payload(product) for product in products]}


@router.get("/export")
def export_csv(db: Session = Depends(get_db)):
    result = export_products(db)
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.post("/import")
def import_csv(
    csv_file: Optional[UploadFile] = File(None, alias="csvFile"),
    db: Session = Depends(get_db),
):
    report = import_upload(db, csv_file)
    return {"success": True, **report.model_dump(by_alias=True)}


@router.get("/{product_id}")
def get_one(product_id: str, db: Session = Depends(get_db)):
    product = get_product(db, _require_product_id(product_id))
    return {"success": True, "data": _product_payload(product)}


@router.get("/{product_id}/history")
def get_history(product_id: str, db: Session = Depends(get_db)):
    history_id = _to_product_id(product_id)
    entries = [] if history_id is None else list_history(db, history_id)
    return {
        "success": True,
        "data": [
            InventoryHistoryRead.model_validate(entry).model_dump(mode="json")
            for entry in entries
        ],
    }


@router.post("", status_code=201)
def create(payload: ProductCreate, db: Session = Depends(get_db)):
    product = create_product(db, payload)
    return {
        "success": True,
        "message": "Product created successfully",
        "data": {"id": product.id},
    }


@router.put("/{product_id}")
def update(
    product_id: str,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    changed_by: str = Depends(get_history_actor),
):
    product = update_product(db, _require_product_id(product_id), payload, changed_by=changed_by)
    return {
        "success": True,
        "message": "Product updated successfully",
        "data": _product_payload(product),
    }


@router.delete("/{product_id}")
def delete(product_id: str, db: Session = Depends(get_db)):
    delete_product(db, _require_product_id(product_id))
    return {"success": True, "message": "Product deleted successfully"}


__all__ = ["router"]
