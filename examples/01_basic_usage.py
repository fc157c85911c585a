"""
Basic usage example of fastapi-request-binder.

Demonstrates:
- Declaring a typed input class
- Binding it as a FastAPI dependency
- Route params, query string and body merged by precedence
"""

from fastapi import Depends, FastAPI

from fastapi_request_binder import bind_dependency

app = FastAPI(title="Basic Binder Example")


class ListOrders:
    """Input for listing a customer's orders."""

    customerId: int
    status: str | None
    page: int = 1
    perPage: int = 20


@app.get("/customers/{customer_id}/orders")
async def list_orders(orders: ListOrders = Depends(bind_dependency(ListOrders))):
    """`customer_id` from the path binds `customerId`; `?per_page=50` binds `perPage`."""
    return {
        "customer": orders.customerId,
        "status": orders.status,
        "page": orders.page,
        "per_page": orders.perPage,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
