"""Supabase Storage adapter for meal photos."""

from dataclasses import dataclass

from supabase import Client

from nutriscan.domain.meals import StoredImage
from nutriscan.services.meals import ImageStorage


@dataclass
class SupabaseImageStorage(ImageStorage):
    """Uploads meal photos to a public Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, path: str, content: bytes, content_type: str) -> StoredImage:
        """Upload image bytes and return their public URL."""
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(path, content, {"content-type": content_type})
        return StoredImage(path=path, public_url=bucket.get_public_url(path))
