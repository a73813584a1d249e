from fastapi import APIRouter, Depends, status

from garment_erp.data.store import DataStore
from garment_erp.dependencies import get_store
from garment_erp.schemas.product import ProductCreate, ProductUpdate
from garment_erp.services import product_service, report_service

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, store: DataStore = Depends(get_store)):
    return product_service.create_product(store, payload)


@router.get("")
def list_products(store: DataStore = Depends(get_store)):
    return product_service.list_products(store)


@router.get("/{product_id}")
def get_product(product_id: str, store: DataStore = Depends(get_store)):
    return product_service.get_product(store, product_id)


@router.get("/{product_id}/cost")
def get_product_cost(product_id: str, store: DataStore = Depends(get_store)):
    return {"product_id": product_id, "cost_per_piece": report_service.product_cost_per_piece(store, product_id)}


@router.put("/{product_id}")
def update_product(product_id: str, updates: ProductUpdate, store: DataStore = Depends(get_store)):
    """Fields left out are unchanged; an ``operations`` list replaces the product's operations."""
    return product_service.update_product(store, product_id, updates)


@router.post("/{product_id}/toggle")
def toggle_product(product_id: str, store: DataStore = Depends(get_store)):
    return product_service.toggle_product_status(store, product_id)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: str, store: DataStore = Depends(get_store)):
    product_service.delete_product(store, product_id)
