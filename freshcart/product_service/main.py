# product_service/main.py
from typing import Optional

from fastapi import FastAPI, HTTPException

from freshcart.product_service.catalog import PRODUCTS

app = FastAPI(title="Product Service (dev mock)")


@app.get("/products")
def list_products(category: Optional[str] = None):
    products = list(PRODUCTS.values())
    if category:
        products = [p for p in products if p["category"].lower() == category.lower()]
    return products


@app.get("/products/{product_id}")
def get_product(product_id: str):
    product = PRODUCTS.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
