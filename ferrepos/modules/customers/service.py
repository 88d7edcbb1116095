import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func, or_
from fastapi import HTTPException, status
from uuid import UUID
from typing import Dict, Any, Optional

from ferrepos.common.validators import compute_check_digit, format_ruc, split_ruc
from ferrepos.modules.customers.models import Customer, DocType
from ferrepos.modules.customers.schemas import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)

# Cliente genérico para ventas sin identificar
DEFAULT_CUSTOMER = {
    "name": "Cliente General",
    "email": "ventas@ferreteria.com",
    "phone": "000-0000",
    "address": "Local",
    "doc_type": DocType.RUC.value,
    "tax_id": "44444401-7",
}


def build_tax_id(doc_type: str, doc_number: Optional[str]) -> Optional[str]:
    """
    Normaliza el documento a guardar.

    Para RUC se calcula el DV sobre el número base; si el usuario ya
    escribió un DV debe coincidir con el calculado.
    """
    if not doc_number or not doc_number.strip():
        return None

    if doc_type != DocType.RUC.value:
        return doc_number.strip()

    base, typed_dv = split_ruc(doc_number)
    tax_id = format_ruc(base)
    if not tax_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="RUC inválido: debe contener dígitos"
        )
    if typed_dv is not None and typed_dv != tax_id.rsplit('-', 1)[1]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Dígito verificador incorrecto. El RUC correcto es {tax_id}"
        )
    return tax_id


def check_digit_preview(base: str) -> Dict[str, Any]:
    dv = compute_check_digit(base)
    return {
        "base": base,
        "check_digit": dv,
        "ruc": format_ruc(base) if dv is not None else None,
    }


class CustomerService:
    """Servicio para gestión de clientes"""

    def __init__(self, db: Session):
        self.db = db

    def _validate_tax_id_unique(self, tax_id: Optional[str], tenant_id: UUID, exclude_id: Optional[UUID] = None):
        if not tax_id:
            return
        query = self.db.query(Customer).filter(
            Customer.tenant_id == tenant_id,
            Customer.tax_id == tax_id
        )
        if exclude_id:
            query = query.filter(Customer.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Ya existe un cliente con el documento {tax_id}"
            )

    def seed_default_customer(self, tenant_id: UUID) -> None:
        """Agregar "Cliente General" (sin commit, lo hace el llamador)"""
        self.db.add(Customer(tenant_id=tenant_id, **DEFAULT_CUSTOMER))

    def create_customer(self, data: CustomerCreate, tenant_id: UUID) -> Customer:
        doc_type = data.doc_type.value
        tax_id = build_tax_id(doc_type, data.doc_number)
        self._validate_tax_id_unique(tax_id, tenant_id)

        try:
            customer = Customer(
                tenant_id=tenant_id,
                name=data.name.strip(),
                email=data.email,
                phone=data.phone,
                address=data.address,
                doc_type=doc_type,
                tax_id=tax_id,
            )
            self.db.add(customer)
            self.db.commit()
            self.db.refresh(customer)
            logger.info(f"Customer {customer.id} created for tenant {tenant_id}")
            return customer
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Error de integridad al crear el cliente"
            )

    def get_customers(
        self,
        tenant_id: UUID,
        search: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Dict[str, Any]:
        """Listar clientes; la búsqueda aplica a nombre y documento"""
        query = self.db.query(Customer).filter(Customer.tenant_id == tenant_id)

        if search:
            term = f"%{search.strip().lower()}%"
            query = query.filter(or_(
                func.lower(Customer.name).like(term),
                Customer.tax_id.like(term)
            ))

        total = query.count()
        customers = query.order_by(Customer.name).offset(offset).limit(limit).all()

        return {
            "customers": customers,
            "total": total,
            "limit": limit,
            "offset": offset
        }

    def get_customer_by_id(self, customer_id: UUID, tenant_id: UUID) -> Customer:
        customer = self.db.query(Customer).filter(
            Customer.id == customer_id,
            Customer.tenant_id == tenant_id
        ).first()
        if not customer:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cliente no encontrado"
            )
        return customer

    def get_default_customer(self, tenant_id: UUID) -> Optional[Customer]:
        """"Cliente General" si existe, si no el primer cliente registrado"""
        query = self.db.query(Customer).filter(Customer.tenant_id == tenant_id)
        generic = query.filter(Customer.tax_id == DEFAULT_CUSTOMER["tax_id"]).first()
        if generic:
            return generic
        return query.order_by(Customer.created_at, Customer.name).first()

    def update_customer(self, customer_id: UUID, data: CustomerUpdate, tenant_id: UUID) -> Customer:
        customer = self.get_customer_by_id(customer_id, tenant_id)
        update_dict = data.model_dump(exclude_unset=True)

        doc_type = update_dict.pop("doc_type", None)
        doc_number = update_dict.pop("doc_number", None)
        if doc_type is not None or doc_number is not None:
            new_type = doc_type.value if doc_type is not None else customer.doc_type
            if doc_number is None:
                # Cambio de tipo sin número: se recalcula sobre el número actual
                doc_number = customer.tax_id or ""
                if customer.doc_type == DocType.RUC.value:
                    doc_number = split_ruc(doc_number)[0]
            tax_id = build_tax_id(new_type, doc_number)
            self._validate_tax_id_unique(tax_id, tenant_id, exclude_id=customer_id)
            customer.doc_type = new_type
            customer.tax_id = tax_id

        for field, value in update_dict.items():
            if value is not None:
                setattr(customer, field, value)

        try:
            self.db.commit()
            self.db.refresh(customer)
            return customer
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Error de integridad al actualizar el cliente"
            )

    def delete_customer(self, customer_id: UUID, tenant_id: UUID) -> Dict[str, str]:
        customer = self.get_customer_by_id(customer_id, tenant_id)
        self.db.delete(customer)
        self.db.commit()
        return {"message": "Cliente eliminado exitosamente"}
