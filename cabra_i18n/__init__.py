"""cabra-i18n - internationalization toolkit for the Cabra da Tech sites.

Locale detection, translation bundles, per-script font loading, RTL layout
switching and a language switcher coordinating them over an HTML document.

Example:
    from cabra_i18n.application import create_application
    from cabra_i18n.document import HtmlDocument

    app = create_application(HtmlDocument.parse(markup))
    locale = await app.start(url="https://example.org/?lang=ar")
    await app.switcher.change_language("en")
"""

__version__ = "0.4.0"
