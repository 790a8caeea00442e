import os


def resolve_document_root(domain: str, root_override: str = None, base_dir: str = "/var/www") -> str:
    """
    计算站点根目录

    An absolute override is used as-is, a relative one is joined under
    ``base_dir``. Without an override the domain with its dots stripped is
    used, so ``example.test`` maps to ``<base_dir>/exampletest``.
    """
    if root_override:
        if os.path.isabs(root_override):
            return root_override
        return os.path.join(base_dir, root_override)
    return os.path.join(base_dir, domain.replace(".", ""))
