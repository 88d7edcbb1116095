from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
from fastapi import HTTPException, status
from uuid import UUID
from typing import Dict, Any, List

from ferrepos.modules.categories.models import Category
from ferrepos.modules.categories.schemas import CategoryCreate, CategoryUpdate

# Categorías con las que arranca toda ferretería nueva
DEFAULT_CATEGORIES: List[str] = [
    "Herramientas Manuales",
    "Herramientas Eléctricas",
    "Fijaciones",
    "Pinturas",
    "Plomería",
    "Electricidad",
    "Jardinería",
]


class CategoryService:
    """Servicio para gestión de categorías"""

    def __init__(self, db: Session):
        self.db = db

    def _find_by_name(self, name: str, tenant_id: UUID):
        return self.db.query(Category).filter(
            func.lower(Category.name) == name.strip().lower(),
            Category.tenant_id == tenant_id
        ).first()

    def seed_default_categories(self, tenant_id: UUID) -> None:
        """Agregar las categorías por defecto (sin commit, lo hace el llamador)"""
        for name in DEFAULT_CATEGORIES:
            self.db.add(Category(name=name, tenant_id=tenant_id))

    def create_category(self, data: CategoryCreate, tenant_id: UUID) -> Category:
        """
        Crear nueva categoría

        Args:
            data: Datos de la categoría
            tenant_id: ID de la ferretería

        Returns:
            Category: Categoría creada
        """
        try:
            if self._find_by_name(data.name, tenant_id):
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Ya existe una categoría con el nombre '{data.name}'"
                )

            category = Category(
                name=data.name.strip(),
                description=data.description,
                tenant_id=tenant_id
            )

            self.db.add(category)
            self.db.commit()
            self.db.refresh(category)
            return category

        except HTTPException:
            raise
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Error de integridad en base de datos"
            )
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error interno: {str(e)}"
            )

    def get_all_categories(self, tenant_id: UUID, limit: int = 100, offset: int = 0) -> Dict[str, Any]:
        """Listar categorías con paginación"""
        query = self.db.query(Category).filter(Category.tenant_id == tenant_id)
        total = query.count()
        categories = query.order_by(Category.name).offset(offset).limit(limit).all()

        return {
            "categories": categories,
            "total": total,
            "limit": limit,
            "offset": offset
        }

    def get_category_by_id(self, category_id: UUID, tenant_id: UUID) -> Category:
        """Obtener categoría por ID"""
        category = self.db.query(Category).filter(
            Category.id == category_id,
            Category.tenant_id == tenant_id
        ).first()

        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Categoría no encontrada"
            )
        return category

    def update_category(self, category_id: UUID, data: CategoryUpdate, tenant_id: UUID) -> Category:
        """Actualizar categoría"""
        try:
            category = self.get_category_by_id(category_id, tenant_id)

            if data.name and data.name.strip().lower() != category.name.lower():
                if self._find_by_name(data.name, tenant_id):
                    raise HTTPException(
                        status_code=status.HTTP_409_CONFLICT,
                        detail=f"Ya existe otra categoría con el nombre '{data.name}'"
                    )

            update_dict = data.model_dump(exclude_unset=True)
            for field, value in update_dict.items():
                setattr(category, field, value)

            self.db.commit()
            self.db.refresh(category)
            return category

        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error actualizando categoría: {str(e)}"
            )

    def delete_category(self, category_id: UUID, tenant_id: UUID) -> Dict[str, str]:
        """Eliminar categoría sin productos asociados"""
        category = self.get_category_by_id(category_id, tenant_id)

        if category.products:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="La categoría tiene productos asociados"
            )

        try:
            self.db.delete(category)
            self.db.commit()
            return {"message": "Categoría eliminada exitosamente"}
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando categoría: {str(e)}"
            )
