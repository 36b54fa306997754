"""
Unit tests for the partial-update merge rule.
"""
from types import SimpleNamespace

from backoffice.models.user import Role
from backoffice.schemas.blog import BlogPatch
from backoffice.schemas.patch import apply_patch, patch_values
from backoffice.schemas.user import UserPatch


def _stored_user():
    return SimpleNamespace(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        role=Role.ADMIN,
        is_active=True,
    )


def test_absent_fields_are_untouched():
    user = _stored_user()
    changed = apply_patch(user, UserPatch(firstName="Grace"), exclude={"password"})
    assert changed == ["first_name"]
    assert user.first_name == "Grace"
    assert user.last_name == "Lovelace"
    assert user.email == "ada@example.com"


def test_explicit_null_does_not_override():
    user = _stored_user()
    apply_patch(user, UserPatch.model_validate({"lastName": None, "isActive": None}), exclude={"password"})
    assert user.last_name == "Lovelace"
    assert user.is_active is True


def test_false_and_empty_values_override():
    user = _stored_user()
    apply_patch(user, UserPatch(isActive=False, lastName=""), exclude={"password"})
    assert user.is_active is False
    assert user.last_name == ""


def test_excluded_fields_are_not_applied():
    user = _stored_user()
    changed = apply_patch(user, UserPatch(password="new-secret"), exclude={"password"})
    assert changed == []
    assert not hasattr(user, "password")


def test_role_is_parsed_into_enum():
    values = patch_values(UserPatch(role="EDITOR"))
    assert values == {"role": Role.EDITOR}


def test_blog_patch_accepts_camel_case_and_dumps_nested_items():
    patch = BlogPatch.model_validate(
        {
            "metaTitle": "Kilimanjaro guide",
            "readingTime": 7,
            "faqs": [{"question": "Best season?", "answer": "June to October"}],
        }
    )
    assert patch_values(patch) == {
        "meta_title": "Kilimanjaro guide",
        "reading_time": 7,
        "faqs": [{"question": "Best season?", "answer": "June to October"}],
    }
