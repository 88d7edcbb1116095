import logging
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from uuid import UUID
from typing import Dict, Any, List, Optional, Tuple

from ferrepos.modules.products.models import Product, InventoryMovement, MovementType
from ferrepos.modules.customers.service import CustomerService
from ferrepos.modules.sales.models import Sale, SaleItem
from ferrepos.modules.sales.schemas import SaleItemIn, CheckoutRequest
from ferrepos.modules.taxes.calculator import compute_totals, TotalsError
from ferrepos.modules.taxes.schemas import CartLine, SaleTotals

logger = logging.getLogger(__name__)

WALK_IN_CUSTOMER = "Consumidor Final"


class SalesService:
    """Servicio de ventas: cotización, cobro e historial"""

    def __init__(self, db: Session):
        self.db = db

    def _merge_items(self, items: List[SaleItemIn]) -> Dict[UUID, int]:
        # El mismo producto escaneado dos veces suma cantidades
        merged: Dict[UUID, int] = {}
        for item in items:
            merged[item.product_id] = merged.get(item.product_id, 0) + item.quantity
        return merged

    def _load_products(
        self, items: List[SaleItemIn], tenant_id: UUID, for_update: bool = False
    ) -> List[Tuple[Product, int]]:
        merged = self._merge_items(items)
        query = self.db.query(Product).filter(
            Product.tenant_id == tenant_id,
            Product.id.in_(list(merged.keys()))
        )
        if for_update:
            query = query.with_for_update()
        products = {p.id: p for p in query.all()}

        lines = []
        for product_id, quantity in merged.items():
            product = products.get(product_id)
            if not product:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Producto {product_id} no encontrado"
                )
            lines.append((product, quantity))
        return lines

    def _totals(self, lines: List[Tuple[Product, int]]) -> SaleTotals:
        try:
            return compute_totals(
                CartLine(unit_price=product.price, quantity=quantity, vat_rate=product.tax_rate)
                for product, quantity in lines
            )
        except TotalsError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e)
            )

    def quote(self, items: List[SaleItemIn], tenant_id: UUID) -> SaleTotals:
        """Totales del carrito sin registrar nada"""
        if not items:
            return SaleTotals()
        return self._totals(self._load_products(items, tenant_id))

    def checkout(self, data: CheckoutRequest, tenant_id: UUID) -> Sale:
        """
        Registrar una venta.

        Valida stock, calcula IVA, guarda la venta con sus líneas, descuenta
        stock y registra un movimiento OUT por producto en una sola
        transacción.
        """
        if not data.items:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="El carrito está vacío"
            )

        lines = self._load_products(data.items, tenant_id, for_update=True)
        for product, quantity in lines:
            if quantity > product.stock:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Stock insuficiente para '{product.name}'. "
                           f"Disponible: {product.stock}, Solicitado: {quantity}"
                )

        customer_service = CustomerService(self.db)
        if data.customer_id:
            customer = customer_service.get_customer_by_id(data.customer_id, tenant_id)
        else:
            customer = customer_service.get_default_customer(tenant_id)

        totals = self._totals(lines)

        try:
            sale = Sale(
                tenant_id=tenant_id,
                customer_id=customer.id if customer else None,
                customer_name=customer.name if customer else WALK_IN_CUSTOMER,
                subtotal=totals.subtotal,
                vat10=totals.vat10,
                vat5=totals.vat5,
                total=totals.total,
            )
            self.db.add(sale)
            self.db.flush()

            for product, quantity in lines:
                sale.items.append(SaleItem(
                    product_id=product.id,
                    name=product.name,
                    sku=product.sku,
                    unit_price=product.price,
                    quantity=quantity,
                    vat_rate=product.tax_rate,
                    line_total=product.price * quantity,
                ))
                product.stock -= quantity
                self.db.add(InventoryMovement(
                    tenant_id=tenant_id,
                    product_id=product.id,
                    product_sku=product.sku,
                    product_name=product.name,
                    quantity=-quantity,
                    movement_type=MovementType.OUT.value,
                    reference=f"VENTA {str(sale.id)[:8].upper()}",
                ))

            self.db.commit()
            self.db.refresh(sale)
            logger.info(f"Sale {sale.id} registered for tenant {tenant_id}: total {sale.total}")
            return sale

        except Exception as e:
            self.db.rollback()
            logger.error(f"Checkout failed for tenant {tenant_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error registrando la venta: {str(e)}"
            )

    def get_sales(self, tenant_id: UUID, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
        """Historial de ventas, las más recientes primero"""
        query = self.db.query(Sale).filter(Sale.tenant_id == tenant_id)
        total = query.count()
        sales = query.order_by(Sale.date.desc()).offset(offset).limit(limit).all()
        return {
            "sales": sales,
            "total": total,
            "limit": limit,
            "offset": offset
        }

    def get_sale_by_id(self, sale_id: UUID, tenant_id: UUID) -> Sale:
        sale = self.db.query(Sale).filter(
            Sale.id == sale_id,
            Sale.tenant_id == tenant_id
        ).first()
        if not sale:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Venta no encontrada"
            )
        return sale
