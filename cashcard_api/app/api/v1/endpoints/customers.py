"""
Customer endpoints for API v1.

Listing and reading customers is public.  Creating and deleting
customers requires any authenticated user.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from cashcard_api.app.core.security import get_current_user
from cashcard_api.app.schemas.customer import CustomerCreate, CustomerRead
from cashcard_api.app.services.customer_service import CustomerService

router = APIRouter()


@router.get("", response_model=List[CustomerRead])
async def list_customers(
    last_name: Optional[str] = Query(None, description="Only customers with exactly this last name"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[CustomerRead]:
    """Return a page of customers ordered by id, optionally filtered by last name."""
    if last_name is not None:
        return await CustomerService.find_by_last_name(last_name, limit=limit, offset=offset)
    return await CustomerService.list_customers(limit=limit, offset=offset)


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(customer_id: int) -> CustomerRead:
    """Retrieve a single customer by ID."""
    customer = await CustomerService.get_customer(customer_id)
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return customer


@router.post("", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_in: CustomerCreate,
    current_user: dict = Depends(get_current_user),
) -> CustomerRead:
    return await CustomerService.create_customer(customer_in)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: int,
    current_user: dict = Depends(get_current_user),
) -> None:
    deleted = await CustomerService.delete_customer(customer_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return None
