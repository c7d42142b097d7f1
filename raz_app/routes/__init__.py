from .main_api import main_bp
from .search_api import search_bp
from .content_api import content_bp

__all__ = ['main_bp', 'search_bp', 'content_bp']
