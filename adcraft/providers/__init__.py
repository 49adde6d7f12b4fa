"""
Cloud capability providers: image and text generation plus asset storage.
"""

from adcraft.providers.base import CloudProvider, StorageBackend
from adcraft.providers.factory import ProviderKind, create_provider
from adcraft.providers.local import LocalProvider
from adcraft.providers.storage import LocalStorage
