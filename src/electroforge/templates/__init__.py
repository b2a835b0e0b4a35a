"""
electroforge.templates - Template Trees
=======================================

Files copied verbatim into generated projects, then rendered by
``electroforge.render``.

Layout
------
base/
    Always copied. Electron main process (``src/main.ts``), preload bridge
    (``src/preload.ts``, ``src/global.d.ts``), React renderer, tsconfig and
    vite config.

with-<feature>/
    Overlay copied on top of base when <feature> is selected. Files at the
    same relative path replace the base version.

with-dist/
    Overlay for the ``dist`` script (electron-builder config).

Tokens
------
``{{APP_NAME}}``, ``{{WINDOW_TITLE}}``, ``{{AUTHOR}}``, ``{{LICENSE}}``,
``{{DESCRIPTION}}``, ``{{FRAMELESS}}`` and ``{{DARKMODE_IMPORT}}``.
"""
