from typing import Dict, List, Optional

from sqlmodel import Session

from storefront.models.discount_type import DiscountType
from storefront.repositories.discount_type_repo import DiscountTypeRepository


class DiscountTypeHasChildrenError(ValueError):
    """No se puede borrar un tipo de descuento con hijos"""


class DiscountTypeService:
    @staticmethod
    def get(session: Session, discount_type_id: int) -> Optional[DiscountType]:
        return DiscountTypeRepository(session).get_by_id(discount_type_id)

    @staticmethod
    def list_all(session: Session) -> List[DiscountType]:
        return DiscountTypeRepository(session).list_all()

    @staticmethod
    def children(session: Session, discount_type_id: int) -> List[DiscountType]:
        return DiscountTypeRepository(session).get_children(discount_type_id)

    @staticmethod
    def create(session: Session, *, name: str, parent_id: Optional[int] = None) -> DiscountType:
        repo = DiscountTypeRepository(session)
        if parent_id is not None and repo.get_by_id(parent_id) is None:
            raise ValueError("El tipo de descuento padre no existe")

        discount_type = repo.add(DiscountType(name=name.strip(), parent_id=parent_id))
        session.commit()
        session.refresh(discount_type)
        return discount_type

    @staticmethod
    def delete(session: Session, discount_type: DiscountType) -> None:
        repo = DiscountTypeRepository(session)
        if repo.has_children(discount_type.id):
            raise DiscountTypeHasChildrenError("El tipo de descuento tiene subtipos")
        repo.remove(discount_type)
        session.commit()

    @staticmethod
    def build_tree(session: Session) -> List[dict]:
        """
        Armar el árbol de tipos de descuento a partir de los punteros al padre.

        Los nodos cuyo padre no existe se tratan como raíces.
        """
        discount_types = DiscountTypeRepository(session).list_all()
        nodes: Dict[int, dict] = {
            dt.id: {"id": dt.id, "name": dt.name, "parent_id": dt.parent_id, "children": []}
            for dt in discount_types
        }

        roots: List[dict] = []
        for dt in discount_types:
            node = nodes[dt.id]
            parent = nodes.get(dt.parent_id) if dt.parent_id is not None else None
            if parent is None or parent is node:
                roots.append(node)
            else:
                parent["children"].append(node)
        return roots
