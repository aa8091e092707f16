"""Access-policy decisions over a resolved configuration.

Pure functions of ``(configuration, item name/id)``; no I/O beyond what
:meth:`AccessPolicy.load` delegates to :mod:`pimctl.config.loader`.
"""

from pimctl.policy.engine import FILTERABLE_DOMAINS, AccessPolicy, Domain

__all__ = ["FILTERABLE_DOMAINS", "AccessPolicy", "Domain"]
