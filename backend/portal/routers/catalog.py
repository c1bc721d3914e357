# portal/routers/catalog.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from portal import models, schemas
from portal.access import require_content_access
from portal.database import get_db
from portal.errors import NotFoundError

router = APIRouter(tags=["catalog"])


def get_or_404(db: Session, model, obj_id: int, label: str):
    obj = db.get(model, obj_id)
    if not obj:
        raise NotFoundError(f"{label} not found")
    return obj


# -------------------------------------------------
# SLIDESHOW
# -------------------------------------------------
@router.get("/slideshow", response_model=list[schemas.SlideshowImageOut])
def list_slideshow(db: Session = Depends(get_db)):
    stmt = (
        select(models.SlideshowImage)
        .where(models.SlideshowImage.is_active == True)  # noqa: E712
        .order_by(models.SlideshowImage.order.asc(), models.SlideshowImage.id.asc())
    )
    return db.scalars(stmt).all()


# -------------------------------------------------
# PROFILES
# -------------------------------------------------
@router.get("/profiles", response_model=list[schemas.ProfileOut])
def list_profiles(db: Session = Depends(get_db)):
    return db.scalars(select(models.Profile).order_by(models.Profile.id.asc())).all()


@router.get("/profiles/{profile_id}", response_model=schemas.ProfileOut)
def get_profile(profile_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, models.Profile, profile_id, "Profile")


@router.get("/profiles/{profile_id}/albums", response_model=list[schemas.AlbumOut])
def list_profile_albums(profile_id: int, db: Session = Depends(get_db)):
    get_or_404(db, models.Profile, profile_id, "Profile")
    stmt = select(models.Album).where(models.Album.profile_id == profile_id).order_by(models.Album.id.asc())
    return db.scalars(stmt).all()


@router.get("/profiles/{profile_id}/videos", response_model=list[schemas.VideoOut])
def list_profile_videos(profile_id: int, db: Session = Depends(get_db)):
    get_or_404(db, models.Profile, profile_id, "Profile")
    stmt = select(models.Video).where(models.Video.profile_id == profile_id).order_by(models.Video.id.asc())
    return db.scalars(stmt).all()


# -------------------------------------------------
# ALBUMS
# -------------------------------------------------
@router.get("/albums", response_model=list[schemas.AlbumOut])
def list_albums(featured: Optional[bool] = Query(None), db: Session = Depends(get_db)):
    stmt = select(models.Album)
    if featured:
        stmt = stmt.where(models.Album.is_featured == True)  # noqa: E712
    return db.scalars(stmt.order_by(models.Album.id.asc())).all()


@router.get("/albums/{album_id}", response_model=schemas.AlbumOut)
def get_album(album_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, models.Album, album_id, "Album")


@router.get(
    "/albums/{album_id}/images",
    response_model=list[schemas.AlbumImageOut],
    dependencies=[Depends(require_content_access)],
)
def list_album_images(album_id: int, db: Session = Depends(get_db)):
    get_or_404(db, models.Album, album_id, "Album")
    stmt = (
        select(models.AlbumImage)
        .where(models.AlbumImage.album_id == album_id)
        .order_by(models.AlbumImage.order.asc(), models.AlbumImage.id.asc())
    )
    return db.scalars(stmt).all()


# -------------------------------------------------
# VIDEOS
# -------------------------------------------------
@router.get("/videos", response_model=list[schemas.VideoOut])
def list_videos(featured: Optional[bool] = Query(None), db: Session = Depends(get_db)):
    stmt = select(models.Video)
    if featured:
        stmt = stmt.where(models.Video.is_featured == True)  # noqa: E712
    return db.scalars(stmt.order_by(models.Video.id.asc())).all()


@router.get(
    "/videos/{video_id}",
    response_model=schemas.VideoOut,
    dependencies=[Depends(require_content_access)],
)
def get_video(video_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, models.Video, video_id, "Video")
