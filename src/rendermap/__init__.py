"""rendermap - named Mustache renderers with layouts and layered partials.

rendermap compiles a set of declared templates into renderers, looked up by
name at request time:

- Partials resolve through static, in-memory partials first, then files on
  disk
- Pages render a content template inside a layout's ``content`` slot
- The renderer registry is built once at startup and fails fast
"""

__version__ = "0.1.0"
__author__ = "rendermap Contributors"
