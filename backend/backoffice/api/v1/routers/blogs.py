# backoffice/api/v1/routers/blogs.py
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from tortoise.expressions import Q

from backoffice.api.v1.deps import require_admin
from backoffice.core.errors import persistence_errors
from backoffice.core.timeutil import iso_or_none, utc_now
from backoffice.models.blog import Blog
from backoffice.schemas.blog import BlogCreateIn, BlogPatch
from backoffice.schemas.patch import apply_patch, patch_values

router = APIRouter(prefix="/blogs", tags=["blogs"])


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def _blog_summary(b: Blog) -> dict:
    """List projection: leaves out the (large) rich text content."""
    return {
        "id": str(b.id),
        "title": b.title,
        "slug": b.slug,
        "excerpt": b.excerpt,
        "featuredImage": b.featured_image,
        "authorName": b.author_name,
        "category": b.category,
        "isPublished": b.is_published,
        "publishedAt": iso_or_none(b.published_at),
        "readingTime": b.reading_time,
    }


def _blog_to_dict(b: Blog) -> dict:
    return {
        **_blog_summary(b),
        "content": b.content,
        "tags": b.tags or [],
        "imageAltText": b.image_alt_text,
        "metaTitle": b.meta_title,
        "metaDescription": b.meta_description,
        "metaKeywords": b.meta_keywords,
        "faqs": b.faqs or [],
        "createdAt": iso_or_none(b.created_at),
        "updatedAt": iso_or_none(b.updated_at),
    }


def _stamp_publication(b: Blog) -> None:
    # A post that becomes published without an explicit date is dated now
    if b.is_published and b.published_at is None:
        b.published_at = utc_now()


# ===== Public routes =====
@router.get("")
async def list_blogs(published_only: str | None = Query(default=None, alias="publishedOnly")):
    """
    List posts, newest first.

    ?publishedOnly=true restricts the list to published posts (public site);
    without it every post is returned (dashboard).
    """
    with persistence_errors("Failed to fetch blogs"):
        qs = Blog.all().order_by("-created_at")
        if published_only == "true":
            qs = qs.filter(is_published=True)
        rows = await qs
    return {"status": "success", "data": [_blog_summary(b) for b in rows]}


@router.get("/{id_or_slug}")
async def get_blog(id_or_slug: str):
    """
    Fetch one post by id or by slug in a single query; first match wins.

    Raises:
        HTTPException (404): No post has that id or slug
    """
    with persistence_errors("Failed to fetch blog post"):
        condition = Q(slug=id_or_slug)
        if _is_uuid(id_or_slug):
            condition = Q(id=id_or_slug) | condition
        b = await Blog.filter(condition).first()

    if b is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    return {"status": "success", "data": _blog_to_dict(b)}


# ===== Admin routes =====
@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
async def create_blog(body: BlogCreateIn):
    if not body.title or not body.slug or not body.content or not body.author_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Title, slug, content, and author are required",
        )

    with persistence_errors("Failed to create blog post"):
        if await Blog.filter(slug=body.slug).exists():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="SEO Slug must be unique")

        b = Blog(**patch_values(body))
        _stamp_publication(b)
        await b.save()

    return {"status": "success", "data": _blog_to_dict(b)}


@router.put("/{blog_id}", dependencies=[Depends(require_admin)])
async def update_blog(blog_id: str, body: BlogPatch):
    """
    Update a post. Keeping its own slug is allowed; taking another post's slug is not.
    An unknown id surfaces as a persistence failure (500).
    """
    with persistence_errors("Failed to update blog post"):
        if body.slug and await Blog.filter(slug=body.slug).exclude(id=blog_id).exists():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="SEO Slug is already used by another post",
            )

        b = await Blog.get(id=blog_id)
        apply_patch(b, body)
        _stamp_publication(b)
        await b.save()

    return {"status": "success", "data": _blog_to_dict(b)}


@router.delete("/{blog_id}", dependencies=[Depends(require_admin)])
async def delete_blog(blog_id: str):
    with persistence_errors("Failed to delete blog post"):
        b = await Blog.get(id=blog_id)
        await b.delete()
    return {"status": "success", "message": "Blog deleted successfully"}
