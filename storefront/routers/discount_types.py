"""
Router de tipos de descuento
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from storefront.core.database import get_session
from storefront.models.discount_type import DiscountType
from storefront.schemas.discount_types import DiscountTypeCreate, DiscountTypeNode, DiscountTypeRead
from storefront.services.discount_types import DiscountTypeHasChildrenError, DiscountTypeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/discount-types", tags=["discount types"])


def _get_or_404(session: Session, discount_type_id: int) -> DiscountType:
    discount_type = DiscountTypeService.get(session, discount_type_id)
    if not discount_type:
        raise HTTPException(status_code=404, detail="Tipo de descuento no encontrado")
    return discount_type


@router.get("", response_model=List[DiscountTypeRead])
def list_discount_types(session: Session = Depends(get_session)):
    """Listar todos los tipos de descuento"""
    return DiscountTypeService.list_all(session)


@router.get("/tree", response_model=List[DiscountTypeNode])
def discount_type_tree(session: Session = Depends(get_session)):
    """Jerarquía completa de tipos de descuento"""
    return DiscountTypeService.build_tree(session)


@router.get("/{discount_type_id}", response_model=DiscountTypeRead)
def get_discount_type(discount_type_id: int, session: Session = Depends(get_session)):
    return _get_or_404(session, discount_type_id)


@router.get("/{discount_type_id}/children", response_model=List[DiscountTypeRead])
def get_discount_type_children(discount_type_id: int, session: Session = Depends(get_session)):
    """Subtipos directos de un tipo de descuento"""
    _get_or_404(session, discount_type_id)
    return DiscountTypeService.children(session, discount_type_id)


@router.post("", response_model=DiscountTypeRead, status_code=status.HTTP_201_CREATED)
def create_discount_type(payload: DiscountTypeCreate, session: Session = Depends(get_session)):
    """Crear un tipo de descuento (opcionalmente bajo un padre)"""
    try:
        return DiscountTypeService.create(session, name=payload.name, parent_id=payload.parent_id)
    except ValueError as e:
        logger.warning("Error validando tipo de descuento", extra={"parent_id": payload.parent_id, "error": str(e)})
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{discount_type_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_discount_type(discount_type_id: int, session: Session = Depends(get_session)):
    discount_type = _get_or_404(session, discount_type_id)
    try:
        DiscountTypeService.delete(session, discount_type)
    except DiscountTypeHasChildrenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
