"""Supabase Storage implementation of the object store."""

from dataclasses import dataclass

from supabase import Client

from snap_caption.services.storage import ObjectStore


@dataclass
class SupabaseObjectStore(ObjectStore):
    """Private Supabase Storage bucket accessed with the service key."""

    client: Client
    bucket: str

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        """Upload bytes; existing keys are never overwritten."""
        self.client.storage.from_(self.bucket).upload(
            path=key,
            file=data,
            file_options={"content-type": content_type, "upsert": "false"},
        )

    def create_signed_url(self, key: str, expires_in: int) -> str:
        """Return a signed download URL for the key."""
        result = self.client.storage.from_(self.bucket).create_signed_url(
            key, expires_in
        )
        signed = result.get("signedURL") or result.get("signedUrl")
        if not signed:
            raise RuntimeError("Supabase returned no signed URL")
        return str(signed)
