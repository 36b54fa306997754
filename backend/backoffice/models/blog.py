# backoffice/models/blog.py
import uuid

from tortoise import fields, models


class Blog(models.Model):
    """
    Blog post shown on the public site and edited from the dashboard.

    - slug: human readable URL key, unique
    - tags: list of strings
    - faqs: list of {"question": ..., "answer": ...} used for SEO rich snippets
    """
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    title = fields.CharField(max_length=255)
    slug = fields.CharField(max_length=255, unique=True, index=True)
    content = fields.TextField()
    excerpt = fields.TextField(null=True)
    author_name = fields.CharField(max_length=128)
    category = fields.CharField(max_length=128, null=True)
    tags = fields.JSONField(default=list)
    featured_image = fields.CharField(max_length=1024, null=True)
    image_alt_text = fields.CharField(max_length=255, null=True)

    is_published = fields.BooleanField(default=False)
    published_at = fields.DatetimeField(null=True)
    reading_time = fields.IntField(null=True)  # Minutes

    # SEO
    meta_title = fields.CharField(max_length=255, null=True)
    meta_description = fields.TextField(null=True)
    meta_keywords = fields.CharField(max_length=512, null=True)
    faqs = fields.JSONField(default=list)

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "blogs"
