"""Markem static site compiler.

Markem walks a directory of Markdown documents and mirrors it into an HTML
site. Configuration (+config.yaml) and layouts (+layout.jinja,
+layout.new.jinja) cascade from each directory to its subdirectories,
layouts nest inside their ancestors' layouts, and every other file is copied
as-is.

The main entry point is the CLI module; build_site in the build module is
the programmatic equivalent.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
