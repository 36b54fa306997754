# backoffice/schemas/blog.py
"""
Pydantic schemas for blog endpoints.
"""
import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field


class FaqItem(BaseModel):
    question: str
    answer: str


class BlogFields(BaseModel):
    """Every writable blog field, all optional."""
    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    author_name: Optional[str] = Field(default=None, alias="authorName")
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    featured_image: Optional[str] = Field(default=None, alias="featuredImage")
    image_alt_text: Optional[str] = Field(default=None, alias="imageAltText")
    is_published: Optional[bool] = Field(default=None, alias="isPublished")
    published_at: Optional[dt.datetime] = Field(default=None, alias="publishedAt")
    reading_time: Optional[int] = Field(default=None, ge=0, alias="readingTime")
    meta_title: Optional[str] = Field(default=None, alias="metaTitle")
    meta_description: Optional[str] = Field(default=None, alias="metaDescription")
    meta_keywords: Optional[str] = Field(default=None, alias="metaKeywords")
    faqs: Optional[List[FaqItem]] = None

    class Config:
        populate_by_name = True


class BlogCreateIn(BlogFields):
    """
    Request model for creating a post.
    title, slug, content and authorName are required (checked by the controller).
    """


class BlogPatch(BlogFields):
    """Request model for updating a post; present-and-non-null fields override."""
