"""
Keyword dispatch tables.

Each table maps the keyword that opens a construct to the name of the
parser method handling it. The keys double as the candidate list for
"Did you mean" suggestions, so a construct added here is suggested too.
"""

from types import MappingProxyType

# Constructs allowed at file level
TOP_LEVEL_PARSERS = MappingProxyType(
    {
        "page": "parse_page",
        "component": "parse_component",
        "app": "parse_app",
        "model": "parse_model",
        "auth": "parse_auth",
        "route": "parse_route",
        "roles": "parse_roles",
        "automation": "parse_automation",
        "dev": "parse_dev",
        # Infrastructure
        "deploy": "parse_deploy",
        "env": "parse_env",
        "docker": "parse_docker",
        "ci": "parse_ci",
        "domain": "parse_domain",
        "cdn": "parse_cdn",
        "monitor": "parse_monitor",
        "backup": "parse_backup",
        # Backend
        "endpoint": "parse_endpoint",
        "middleware": "parse_middleware",
        "queue": "parse_queue",
        "cron": "parse_cron",
        "cache": "parse_cache",
        "migrate": "parse_migrate",
        "seed": "parse_seed",
        "webhook": "parse_webhook",
        "storage": "parse_storage",
        # Testing
        "test": "parse_test",
        "e2e": "parse_e2e",
        "mock": "parse_mock",
        "fixture": "parse_fixture",
        # Internationalisation
        "i18n": "parse_i18n",
        "locale": "parse_locale",
        "rtl": "parse_rtl",
    }
)

# Declarations allowed in a page, component or app body (but not in a UI block)
BODY_PARSERS = MappingProxyType(
    {
        "state": "parse_state",
        "derived": "parse_derived",
        "prop": "parse_prop",
        "type": "parse_type_decl",
        "store": "parse_store",
        "api": "parse_api",
        "fn": "parse_fn",
        "async": "parse_async_fn",
        "on": "parse_on",
        "watch": "parse_watch",
        "check": "parse_check",
        "style": "parse_style",
        "js": "parse_js",
        "use": "parse_use",
        "data": "parse_data",
        "form": "parse_form",
        "realtime": "parse_realtime",
        "emit": "parse_emit",
        "error": "parse_error_boundary",
        "loading": "parse_loading",
        "offline": "parse_offline",
        "retry": "parse_retry",
        "log": "parse_log",
    }
)

# UI elements, allowed in bodies and in layout blocks
UI_PARSERS = MappingProxyType(
    {
        "layout": "parse_layout",
        "text": "parse_text",
        "button": "parse_button",
        "input": "parse_input",
        "image": "parse_image",
        "link": "parse_link",
        "toggle": "parse_toggle",
        "select": "parse_select",
        "component": "parse_component_call",
        "if": "parse_if_block",
        "for": "parse_for_block",
        "show": "parse_show_block",
        "hide": "parse_hide_block",
        # Dashboards and overlays
        "table": "parse_table",
        "chart": "parse_chart",
        "stat": "parse_stat",
        "stats": "parse_stats_grid",
        "nav": "parse_nav",
        "upload": "parse_upload",
        "modal": "parse_modal",
        "toast": "parse_toast",
        # Patterns
        "crud": "parse_crud",
        "list": "parse_list",
        "drawer": "parse_drawer",
        "command": "parse_command",
        "confirm": "parse_confirm",
        "pay": "parse_pay",
        "cart": "parse_cart",
        "media": "parse_media",
        "gallery": "parse_media",
        "notification": "parse_notification",
        "search": "parse_search",
        "filter": "parse_filter",
        "social": "parse_social",
        "profile": "parse_profile",
        "hero": "parse_hero",
        "features": "parse_features",
        "pricing": "parse_pricing",
        "faq": "parse_faq",
        "testimonials": "parse_testimonials",
        "footer": "parse_footer",
        "admin": "parse_admin",
        "seo": "parse_seo",
        "a11y": "parse_a11y",
        "animate": "parse_animate",
        "gesture": "parse_gesture",
        "ai": "parse_ai",
        "breadcrumb": "parse_breadcrumb",
        "responsive": "parse_responsive",
        "mobile": "parse_responsive",
        "desktop": "parse_responsive",
        "tablet": "parse_responsive",
    }
)
