from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.customers.schemas import CustomerCreate, CustomerUpdate, CustomerResponse
from app.modules.customers.service import CustomerService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/customers", tags=["customers"])


def get_customer_service(supabase: Client = Depends(get_service_supabase)) -> CustomerService:
    return CustomerService(supabase)


@router.get("", response_model=List[CustomerResponse])
async def list_customers(
    search: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("view_customers")),
    service: CustomerService = Depends(get_customer_service)
):
    """List customers with booking counts"""
    return service.list_customers(search=search, limit=limit, offset=offset)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: str,
    user_data: Dict = Depends(require_permission("view_customers")),
    service: CustomerService = Depends(get_customer_service)
):
    return service.get_customer(customer_id)


@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(
    data: CustomerCreate,
    user_data: Dict = Depends(require_permission("manage_customers")),
    service: CustomerService = Depends(get_customer_service)
):
    return service.create_customer(data)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: str,
    data: CustomerUpdate,
    user_data: Dict = Depends(require_permission("manage_customers")),
    service: CustomerService = Depends(get_customer_service)
):
    return service.update_customer(customer_id, data)


@router.delete("/{customer_id}", status_code=204)
async def delete_customer(
    customer_id: str,
    user_data: Dict = Depends(require_permission("manage_customers")),
    service: CustomerService = Depends(get_customer_service)
):
    """Delete customer (409 while bookings reference it)"""
    service.delete_customer(customer_id)
    return None
