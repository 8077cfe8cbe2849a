"""
HTTP routes for the blog posts API.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from blog_api.db import DbClient
from blog_api.dependencies import get_db_client
from blog_api.errors import NotFoundError, ValidationError
from blog_api.schemas import BlogPostCreate, BlogPostResponse, BlogPostUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/blog-posts", response_model=list[BlogPostResponse])
def list_blog_posts(db: DbClient = Depends(get_db_client)):
    return [BlogPostResponse.from_record(post) for post in db.list_posts()]


@router.get("/blog-posts/{post_id}", response_model=BlogPostResponse)
def get_blog_post(post_id: str, db: DbClient = Depends(get_db_client)):
    post = db.get_post(post_id)
    if not post:
        raise NotFoundError(f"Blog post {post_id} not found")
    return BlogPostResponse.from_record(post)


@router.post("/blog-posts", response_model=BlogPostResponse, status_code=201)
def create_blog_post(payload: BlogPostCreate, db: DbClient = Depends(get_db_client)):
    post = db.insert_post(
        author=payload.author.model_dump(),
        title=payload.title,
        content=payload.content,
    )
    logger.info("Created blog post %s", post.id)
    return BlogPostResponse.from_record(post)


@router.put("/blog-posts/{post_id}", status_code=204, response_class=Response)
def update_blog_post(
    post_id: str,
    payload: BlogPostUpdate,
    db: DbClient = Depends(get_db_client),
):
    """
    Apply the supplied title, content and author fields; others are left alone.
    """
    if payload.id != post_id:
        raise ValidationError(
            f"Request path id ({post_id}) and request body id ({payload.id}) must match"
        )
    updated = db.update_post(post_id, payload.changes())
    if updated is None:
        logger.info("Update for unknown blog post %s ignored", post_id)
    else:
        logger.info("Updated blog post %s", post_id)
    return Response(status_code=204)


@router.delete("/blog-posts/{post_id}", status_code=204, response_class=Response)
def delete_blog_post(post_id: str, db: DbClient = Depends(get_db_client)):
    if db.delete_post(post_id):
        logger.info("Deleted blog post %s", post_id)
    return Response(status_code=204)
