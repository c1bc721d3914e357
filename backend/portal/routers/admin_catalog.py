# portal/routers/admin_catalog.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from portal import auth, models, schemas
from portal.database import get_db
from portal.routers.catalog import get_or_404

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin-catalog"],
    dependencies=[Depends(auth.require_admin)],
)


# ----------------------------
# Helpers
# ----------------------------
def _apply(obj, payload) -> None:
    """Copy only the fields the client actually sent. Null is ignored for required columns."""
    columns = obj.__table__.c
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None and not columns[key].nullable:
            continue
        setattr(obj, key, value)


def _check_profile(db: Session, profile_id: Optional[int]) -> None:
    if profile_id is not None:
        get_or_404(db, models.Profile, profile_id, "Profile")


def _sync_image_count(db: Session, album: models.Album) -> None:
    album.image_count = db.scalar(
        select(func.count(models.AlbumImage.id)).where(models.AlbumImage.album_id == album.id)
    ) or 0


# ----------------------------
# Profiles
# ----------------------------
@router.post("/profiles", response_model=schemas.ProfileOut, status_code=201)
def admin_create_profile(payload: schemas.ProfileIn, db: Session = Depends(get_db)):
    profile = models.Profile(**payload.model_dump())
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@router.put("/profiles/{profile_id}", response_model=schemas.ProfileOut)
def admin_update_profile(profile_id: int, payload: schemas.ProfileUpdateIn, db: Session = Depends(get_db)):
    profile = get_or_404(db, models.Profile, profile_id, "Profile")
    _apply(profile, payload)
    db.commit()
    db.refresh(profile)
    return profile


@router.delete("/profiles/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def admin_delete_profile(profile_id: int, db: Session = Depends(get_db)):
    """
    Albums and videos of the profile are kept with profile_id set to NULL.
    """
    profile = get_or_404(db, models.Profile, profile_id, "Profile")

    db.execute(update(models.Album).where(models.Album.profile_id == profile_id).values(profile_id=None))
    db.execute(update(models.Video).where(models.Video.profile_id == profile_id).values(profile_id=None))
    db.delete(profile)
    db.commit()

    logger.info("Deleted profile id=%s (albums/videos detached)", profile_id)
    return


# ----------------------------
# Albums
# ----------------------------
@router.post("/albums", response_model=schemas.AlbumOut, status_code=201)
def admin_create_album(payload: schemas.AlbumIn, db: Session = Depends(get_db)):
    _check_profile(db, payload.profile_id)
    album = models.Album(**payload.model_dump(), image_count=0)
    db.add(album)
    db.commit()
    db.refresh(album)
    return album


@router.put("/albums/{album_id}", response_model=schemas.AlbumOut)
def admin_update_album(album_id: int, payload: schemas.AlbumUpdateIn, db: Session = Depends(get_db)):
    album = get_or_404(db, models.Album, album_id, "Album")
    _check_profile(db, payload.profile_id)
    _apply(album, payload)
    db.commit()
    db.refresh(album)
    return album


@router.delete("/albums/{album_id}", status_code=status.HTTP_204_NO_CONTENT)
def admin_delete_album(album_id: int, db: Session = Depends(get_db)):
    album = get_or_404(db, models.Album, album_id, "Album")
    db.delete(album)  # images go with it (delete-orphan)
    db.commit()
    logger.info("Deleted album id=%s", album_id)
    return


@router.post("/albums/{album_id}/images", response_model=schemas.AlbumImageOut, status_code=201)
def admin_add_album_image(album_id: int, payload: schemas.AlbumImageIn, db: Session = Depends(get_db)):
    album = get_or_404(db, models.Album, album_id, "Album")
    image = models.AlbumImage(album_id=album.id, **payload.model_dump())
    db.add(image)
    db.flush()
    _sync_image_count(db, album)
    db.commit()
    db.refresh(image)
    return image


@router.put("/album-images/{image_id}", response_model=schemas.AlbumImageOut)
def admin_update_album_image(image_id: int, payload: schemas.AlbumImageUpdateIn, db: Session = Depends(get_db)):
    image = get_or_404(db, models.AlbumImage, image_id, "Album image")
    _apply(image, payload)
    db.commit()
    db.refresh(image)
    return image


@router.delete("/album-images/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
def admin_delete_album_image(image_id: int, db: Session = Depends(get_db)):
    image = get_or_404(db, models.AlbumImage, image_id, "Album image")
    album = image.album
    db.delete(image)
    db.flush()
    _sync_image_count(db, album)
    db.commit()
    logger.info("Deleted album image id=%s from album id=%s", image_id, album.id)
    return


# ----------------------------
# Videos
# ----------------------------
@router.post("/videos", response_model=schemas.VideoOut, status_code=201)
def admin_create_video(payload: schemas.VideoIn, db: Session = Depends(get_db)):
    _check_profile(db, payload.profile_id)
    video = models.Video(**payload.model_dump())
    db.add(video)
    db.commit()
    db.refresh(video)
    return video


@router.put("/videos/{video_id}", response_model=schemas.VideoOut)
def admin_update_video(video_id: int, payload: schemas.VideoUpdateIn, db: Session = Depends(get_db)):
    video = get_or_404(db, models.Video, video_id, "Video")
    _check_profile(db, payload.profile_id)
    _apply(video, payload)
    db.commit()
    db.refresh(video)
    return video


@router.delete("/videos/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
def admin_delete_video(video_id: int, db: Session = Depends(get_db)):
    video = get_or_404(db, models.Video, video_id, "Video")
    db.delete(video)
    db.commit()
    logger.info("Deleted video id=%s", video_id)
    return


# ----------------------------
# Slideshow
# ----------------------------
@router.post("/slideshow", response_model=schemas.SlideshowImageOut, status_code=201)
def admin_create_slide(payload: schemas.SlideshowImageIn, db: Session = Depends(get_db)):
    slide = models.SlideshowImage(**payload.model_dump())
    db.add(slide)
    db.commit()
    db.refresh(slide)
    return slide


@router.put("/slideshow/{slide_id}", response_model=schemas.SlideshowImageOut)
def admin_update_slide(slide_id: int, payload: schemas.SlideshowImageUpdateIn, db: Session = Depends(get_db)):
    slide = get_or_404(db, models.SlideshowImage, slide_id, "Slideshow image")
    _apply(slide, payload)
    db.commit()
    db.refresh(slide)
    return slide


@router.delete("/slideshow/{slide_id}", status_code=status.HTTP_204_NO_CONTENT)
def admin_delete_slide(slide_id: int, db: Session = Depends(get_db)):
    slide = get_or_404(db, models.SlideshowImage, slide_id, "Slideshow image")
    db.delete(slide)
    db.commit()
    logger.info("Deleted slideshow image id=%s", slide_id)
    return
