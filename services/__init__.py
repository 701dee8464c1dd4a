from .auth import login_required, admin_required, is_admin
from .skin_search import search_skins
from .catalog_import import import_skins

__all__ = ['login_required', 'admin_required', 'is_admin', 'search_skins', 'import_skins']
