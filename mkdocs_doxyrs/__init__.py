"""
mkdocs-doxyrs: Doxygen comments to rustdoc Markdown.

Converts Doxygen-style documentation comments (``@brief``, ``@param``,
``@return`` and friends) into rustdoc Markdown, either one comment at a
time, across whole bindgen-generated files, or inside MkDocs pages.
"""

__version__ = "0.3.0"
