"""Catalogue of the page-builder blocks shipped with the platform."""

from __future__ import annotations

from typing import Tuple

from app.blocks.types import BlockDefinition, FieldDefinition, VersionHistory

_INITIAL_RELEASE = (VersionHistory(version="1.0.0", changes=("Initial release",), date="2025-02-20"),)


def _style_field() -> FieldDefinition:
    return FieldDefinition(name="style", type="group", label="Style")


HERO = BlockDefinition(
    slug="hero",
    label="Hero",
    version="1.0.0",
    category="header",
    description="Large heading with optional background image and call-to-action buttons",
    fields=(
        FieldDefinition(name="heading", type="text", required=True),
        FieldDefinition(name="subheading", type="text"),
        FieldDefinition(name="backgroundImage", type="upload", label="Background image"),
        FieldDefinition(name="buttons", type="array"),
        _style_field(),
    ),
    versions=_INITIAL_RELEASE,
)

TEXT_CONTENT = BlockDefinition(
    slug="textContent",
    label="Text Content",
    version="1.0.0",
    category="content",
    description="Rich text in one or more columns",
    fields=(
        FieldDefinition(name="content", type="richText", required=True),
        FieldDefinition(name="columns", type="select", default_value="1"),
        _style_field(),
    ),
    versions=_INITIAL_RELEASE,
)

TEAM_GRID = BlockDefinition(
    slug="teamGrid",
    label="Team Grid",
    version="1.0.0",
    category="people",
    description="Grid of team members",
    required_feature="team",
    fields=(
        FieldDefinition(name="heading", type="text", required=True),
        FieldDefinition(name="subheading", type="text"),
        FieldDefinition(name="layout", type="select", default_value="grid"),
        _style_field(),
    ),
    versions=_INITIAL_RELEASE,
)

SERVICE_GRID = BlockDefinition(
    slug="serviceGrid",
    label="Service Grid",
    version="1.0.0",
    category="content",
    description="Grid or list of the services offered",
    required_feature="services",
    fields=(
        FieldDefinition(name="heading", type="text", required=True),
        FieldDefinition(name="subheading", type="text"),
        FieldDefinition(name="layout", type="select", default_value="grid"),
        _style_field(),
    ),
    versions=_INITIAL_RELEASE,
)

CONTACT_FORM = BlockDefinition(
    slug="contactForm",
    label="Contact Form",
    version="1.0.0",
    category="forms",
    description="Contact or appointment request form",
    fields=(
        FieldDefinition(name="heading", type="text", required=True),
        FieldDefinition(name="subheading", type="text"),
        FieldDefinition(name="formType", type="select", label="Form type", default_value="contact"),
        _style_field(),
        FieldDefinition(name="contactInfo", type="group", label="Contact info"),
    ),
    versions=_INITIAL_RELEASE,
)

TESTIMONIALS_GRID = BlockDefinition(
    slug="testimonialsGrid",
    label="Testimonials Grid",
    version="1.0.0",
    category="social-proof",
    description="Client testimonials as a grid or carousel",
    required_feature="testimonials",
    fields=(
        FieldDefinition(name="heading", type="text", required=True),
        FieldDefinition(name="subheading", type="text"),
        FieldDefinition(name="testimonials", type="array"),
        _style_field(),
    ),
    versions=_INITIAL_RELEASE,
)

FAQ = BlockDefinition(
    slug="faq",
    label="FAQ Section",
    version="1.0.0",
    category="content",
    description="Frequently asked questions",
    fields=(
        FieldDefinition(name="heading", type="text", required=True),
        FieldDefinition(name="subheading", type="textarea"),
        FieldDefinition(name="questions", type="array"),
        _style_field(),
    ),
    versions=_INITIAL_RELEASE,
)

DEFAULT_BLOCKS: Tuple[BlockDefinition, ...] = (
    HERO,
    TEXT_CONTENT,
    TEAM_GRID,
    SERVICE_GRID,
    CONTACT_FORM,
    TESTIMONIALS_GRID,
    FAQ,
)
