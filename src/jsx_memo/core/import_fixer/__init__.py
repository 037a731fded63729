"""
Import Fixer Package.

This package manages the wrapper component import:
1.  **Detection**: Finding an existing named import of the wrapper.
2.  **Injection**: Adding it after the directive prologue when missing.
"""

from jsx_memo.core.import_fixer.injection import ImportInjectionPass, ImportInjector

__all__ = ["ImportInjectionPass", "ImportInjector"]
