import logging
from supabase import Client
from app.modules.customers.schemas import CustomerCreate, CustomerUpdate, CustomerResponse
from typing import Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _booking_counts(self, customer_ids: List[str]) -> Dict[str, int]:
        if not customer_ids:
            return {}
        result = self.supabase.table("bookings")\
            .select("customer_id")\
            .in_("customer_id", customer_ids)\
            .execute()
        counts: Dict[str, int] = {}
        for row in result.data or []:
            counts[row["customer_id"]] = counts.get(row["customer_id"], 0) + 1
        return counts

    def list_customers(
        self,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[CustomerResponse]:
        """List customers with their booking count, newest first"""
        try:
            query = self.supabase.table("customers").select("*")
            if search:
                query = query.ilike("fullname", f"%{search}%")
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            rows = result.data or []
            counts = self._booking_counts([r["id"] for r in rows])
            return [CustomerResponse(**r, booking_count=counts.get(r["id"], 0)) for r in rows]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_customer(self, customer_id: str) -> CustomerResponse:
        try:
            result = self.supabase.table("customers")\
                .select("*")\
                .eq("id", customer_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Customer not found")
            count = self._booking_counts([customer_id]).get(customer_id, 0)
            return CustomerResponse(**result.data[0], booking_count=count)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_customer(self, data: CustomerCreate) -> CustomerResponse:
        try:
            payload = data.model_dump(exclude_none=True, mode="json")
            result = self.supabase.table("customers").insert(payload).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create customer")
            return CustomerResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_customer(self, customer_id: str, data: CustomerUpdate) -> CustomerResponse:
        payload = data.model_dump(exclude_unset=True, mode="json")
        if not payload:
            return self.get_customer(customer_id)
        try:
            result = self.supabase.table("customers")\
                .update(payload)\
                .eq("id", customer_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Customer not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return self.get_customer(customer_id)

    def delete_customer(self, customer_id: str) -> bool:
        """Delete customer; refused while any booking still references it"""
        try:
            bookings = self.supabase.table("bookings")\
                .select("id")\
                .eq("customer_id", customer_id)\
                .limit(1)\
                .execute()
            if bookings.data:
                raise HTTPException(status_code=409, detail="Cannot delete customer with existing bookings")

            result = self.supabase.table("customers")\
                .delete()\
                .eq("id", customer_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Customer not found")
            logger.info(f"Customer {customer_id} deleted")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
