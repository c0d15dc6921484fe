"""Site setting schemas."""

from pydantic import BaseModel


class SiteSettings(BaseModel):
    """Public site configuration. Every key falls back to its default."""
    site_name: str = "Lite Blog"
    site_description: str = "A role-based blog system"
    site_keywords: str = "blog, articles, technology"
    home_title: str = "Welcome to Lite Blog"
    home_subtitle: str = "Discover amazing articles and insights"
    home_custom_content: str = (
        "About this blog: This is a customizable area where you can "
        "introduce yourself or your website."
    )
    footer_text: str = "Lite Blog. All rights reserved."
    logo_url: str = ""
