from typing import List
from fastapi import APIRouter, Depends, Response, status

from banner_service.api.deps import get_store, require_roles
from banner_service.db.banner_store import BannerStore
from banner_service.schemas.banner import BannerCreate, BannerOut, BannerStats, BannerUpdate, ReorderBanners
from banner_service.services import banners as service

router = APIRouter()
admin_only = [Depends(require_roles("admin"))]

""" Banner endpoints.

/active is public and recomputed on every call; everything else is admin CRUD.
Static paths are declared before /{banner_id}.
"""

@router.get("/active", response_model=List[BannerOut])
def active_banners(store: BannerStore = Depends(get_store)):
    return service.get_active_banners(store)

@router.get("/stats", dependencies=admin_only, response_model=BannerStats)
def banner_stats(store: BannerStore = Depends(get_store)):
    return service.compute_stats(store.find_all())

@router.put("/reorder", dependencies=admin_only, response_model=List[BannerOut])
def reorder_banners(payload: ReorderBanners, store: BannerStore = Depends(get_store)):
    return service.reorder(store, payload.banners)

@router.get("", dependencies=admin_only, response_model=List[BannerOut])
def list_banners(store: BannerStore = Depends(get_store)):
    return service.list_banners(store)

@router.post("", dependencies=admin_only, response_model=BannerOut, status_code=status.HTTP_201_CREATED)
def create_banner(payload: BannerCreate, store: BannerStore = Depends(get_store)):
    return service.create_banner(store, payload)

@router.get("/{banner_id}", dependencies=admin_only, response_model=BannerOut)
def get_banner(banner_id: int, store: BannerStore = Depends(get_store)):
    return store.find_by_id(banner_id)

@router.patch("/{banner_id}", dependencies=admin_only, response_model=BannerOut)
def update_banner(banner_id: int, payload: BannerUpdate, store: BannerStore = Depends(get_store)):
    return service.update_banner(store, banner_id, payload)

@router.delete("/{banner_id}", dependencies=admin_only, status_code=status.HTTP_204_NO_CONTENT)
def delete_banner(banner_id: int, store: BannerStore = Depends(get_store)):
    service.delete_banner(store, banner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
