"""
Capitalization core: token location, syntactic classification, the
capitalize/skip decision, and the incremental and batch drivers built on it.

Modules are imported directly (``sql_upcase.domain.capitalization.engine``);
this package module stays import-free so that the keyword infrastructure can
depend on ``tokens`` without a cycle.
"""
