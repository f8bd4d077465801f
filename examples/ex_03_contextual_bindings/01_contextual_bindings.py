"""Contextual bindings: satisfy one abstraction differently per consumer.

``when(Consumer).needs(Abstract).give(Implementation)`` overrides a dependency
only when ``Consumer`` requests it directly. Every other consumer keeps the
global binding, and the override is never served from the singleton cache.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from contextwire import Container


class Storage(ABC):
    @abstractmethod
    def name(self) -> str: ...


class DiskStorage(Storage):
    def name(self) -> str:
        return "disk"


class S3Storage(Storage):
    def name(self) -> str:
        return "s3"


class PhotoController:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage


class VideoController:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage


class Dashboard:
    def __init__(self, photos: PhotoController) -> None:
        self.photos = photos


def main() -> None:
    container = Container()
    container.singleton(Storage, DiskStorage)
    container.when(VideoController).needs(Storage).give(S3Storage)

    photos = container.make(PhotoController)
    videos = container.make(VideoController)
    print(f"photos={photos.storage.name()}")  # => photos=disk
    print(f"videos={videos.storage.name()}")  # => videos=s3

    shared = container.make(Storage)
    print(f"photos_shared={photos.storage is shared}")  # => photos_shared=True
    print(f"videos_shared={videos.storage is shared}")  # => videos_shared=False

    container.when(Dashboard).needs(Storage).give(S3Storage)
    dashboard = container.make(Dashboard)
    print(f"dashboard_photos={dashboard.photos.storage.name()}")  # => dashboard_photos=disk


if __name__ == "__main__":
    main()
