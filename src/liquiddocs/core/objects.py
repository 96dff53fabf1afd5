"""Platform object names accepted as ``@param`` types.

Besides the built-in ``string``, ``number``, ``boolean`` and ``object`` types,
a doc block may reference any Shopify Liquid object by name, e.g.
``@param {product} item``. The allow-list is a configuration value: the parser
receives it as an argument and never mutates it.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, Optional

SHOPIFY_OBJECTS: frozenset[str] = frozenset(
    {
        "additional_checkout_buttons",
        "address",
        "all_country_option_tags",
        "all_products",
        "app",
        "article",
        "articles",
        "block",
        "blog",
        "blogs",
        "brand",
        "brand_color",
        "canonical_url",
        "cart",
        "checkout",
        "collection",
        "collections",
        "color",
        "color_scheme",
        "color_scheme_group",
        "comment",
        "company",
        "company_address",
        "company_location",
        "content_for_additional_checkout_buttons",
        "content_for_header",
        "content_for_index",
        "content_for_layout",
        "country",
        "country_option_tags",
        "currency",
        "current_page",
        "current_tags",
        "customer",
        "discount",
        "discount_allocation",
        "discount_application",
        "external_video",
        "filter",
        "filter_value",
        "filter_value_display",
        "focal_point",
        "font",
        "forloop",
        "form",
        "form_errors",
        "fulfillment",
        "generic_file",
        "gift_card",
        "group",
        "handle",
        "image",
        "image_presentation",
        "images",
        "line_item",
        "link",
        "linklist",
        "linklists",
        "localization",
        "location",
        "market",
        "measurement",
        "media",
        "metafield",
        "metaobject",
        "metaobject_definition",
        "metaobjects",
        "model",
        "model_source",
        "money",
        "order",
        "page",
        "page_description",
        "page_image",
        "page_title",
        "pages",
        "paginate",
        "policy",
        "powered_by_link",
        "predictive_search",
        "product",
        "product_option",
        "product_option_value",
        "quantity_price_break",
        "quantity_rule",
        "rating",
        "recipient",
        "recommendations",
        "remote_product",
        "request",
        "robots",
        "rule",
        "routes",
        "script",
        "scripts",
        "search",
        "section",
        "selling_plan",
        "selling_plan_allocation",
        "selling_plan_allocation_price_adjustment",
        "selling_plan_checkout_charge",
        "selling_plan_group",
        "selling_plan_group_option",
        "selling_plan_option",
        "selling_plan_price_adjustment",
        "settings",
        "shipping_method",
        "shop",
        "shop_locale",
        "sitemap",
        "sort_option",
        "store_availability",
        "swatch",
        "tablerowloop",
        "tax_line",
        "taxonomy_category",
        "template",
        "theme",
        "transaction",
        "transaction_payment_details",
        "unit_price_measurement",
        "user",
        "user_agent",
        "variant",
        "video",
        "video_source",
    }
)


def resolve_allowed_types(extra: Optional[Iterable[str]] = None) -> AbstractSet[str]:
    """Build the set of platform object names the parser accepts.

    Args:
        extra: Additional names, e.g. from the ``extra_types`` setting

    Returns:
        The default allow-list, extended with ``extra`` when given
    """
    if not extra:
        return SHOPIFY_OBJECTS
    names = {name.strip() for name in extra if name and name.strip()}
    return SHOPIFY_OBJECTS | names


def is_platform_object(name: str, allowed_types: AbstractSet[str] = SHOPIFY_OBJECTS) -> bool:
    """Check if ``name`` is an allowed platform object."""
    return name in allowed_types
