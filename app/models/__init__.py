from .base import Base

from .photo import PhotoEntity
