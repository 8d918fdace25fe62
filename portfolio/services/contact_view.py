"""
Presentation adapter for the contact section.

Combines a controller snapshot with translated labels into the values a
template needs: field texts and errors, button and banner state, text
direction and the direct contact links.
"""

from typing import List, Optional

from pydantic import BaseModel

from portfolio.core.config import Settings, settings
from portfolio.core.labels import LabelSource, is_rtl
from portfolio.schemas.contact import ContactField, SubmissionStatus
from portfolio.services.contact_controller import ContactFormState
from portfolio.services.handoff_service import direct_contact_links


class FieldView(BaseModel):
    name: str
    label: str
    value: str
    error: Optional[str] = None
    disabled: bool = False
    multiline: bool = False


class BannerView(BaseModel):
    kind: str  # "success" or "error"
    text: str


class DirectLinkView(BaseModel):
    kind: str
    label: str
    href: str
    display: str
    new_context: bool


class ContactSectionView(BaseModel):
    direction: str
    title: str
    subtitle: str
    fields: List[FieldView]
    submit_label: str
    busy: bool
    banner: Optional[BannerView] = None
    direct_heading: str
    direct_links: List[DirectLinkView]


_LINK_LABEL_KEYS = {"whatsapp": "contact.whatsapp", "email": "contact.email"}


def build_contact_view(
    state: ContactFormState,
    labels: LabelSource,
    language: Optional[str] = None,
    config: Optional[Settings] = None,
) -> ContactSectionView:
    """
    Render-ready view of the contact section.

    Args:
        state: Controller snapshot
        labels: Translated string lookup by key
        language: Page language, used for text direction
        config: Settings for direction and direct links (defaults to global)
    """
    config = config or settings
    language = language or config.DEFAULT_LANGUAGE
    busy = state.status == SubmissionStatus.SENDING

    fields = [
        FieldView(
            name=field.value,
            label=labels(f"contact.form.{field.value}"),
            value=state.values.get(field.value, ""),
            error=state.errors.get(field.value),
            disabled=state.inputs_disabled,
            multiline=field == ContactField.MESSAGE,
        )
        for field in ContactField
    ]

    banner = None
    if state.status == SubmissionStatus.SUCCESS:
        banner = BannerView(kind="success", text=labels("contact.form.success"))
    elif state.status == SubmissionStatus.ERROR:
        banner = BannerView(kind="error", text=labels("contact.form.error"))

    links = [
        DirectLinkView(
            kind=link.kind,
            label=labels(_LINK_LABEL_KEYS[link.kind]),
            href=link.href,
            display=link.display,
            new_context=link.new_context,
        )
        for link in direct_contact_links(config)
    ]

    return ContactSectionView(
        direction="rtl" if is_rtl(language, config.RTL_LANGUAGES) else "ltr",
        title=labels("contact.title"),
        subtitle=labels("contact.subtitle"),
        fields=fields,
        submit_label=labels("contact.form.sending" if busy else "contact.form.send"),
        busy=busy,
        banner=banner,
        direct_heading=labels("contact.or"),
        direct_links=links,
    )
