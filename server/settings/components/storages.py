"""Django storage configuration for S3-compatible backends.

This module configures django-storages to work with:
- MinIO for local development
- Supabase Storage / Cloudflare R2 / AWS S3 for production

All of them speak the S3 API and use the same S3Storage backend.
"""

from typing import Any, Final

from server.settings.components import config

# Uses S3-compatible storage for user files, local storage for static files
STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.portfolio.infrastructure.storage.ObjectStorage',
        'OPTIONS': {
            'bucket_name': config(
                'AWS_STORAGE_BUCKET_NAME',
                default='dagitab',
            ),
            'access_key': config('AWS_ACCESS_KEY_ID', default=None),
            'secret_key': config('AWS_SECRET_ACCESS_KEY', default=None),
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='us-east-1',
            ),
            'file_overwrite': False,  # Overwrites are explicit per call
            'default_acl': None,  # Inherit bucket ACL, bucket stays private
            'querystring_auth': True,  # Every URL is signed
            'signature_version': 's3v4',
        },
    },
    'staticfiles': {
        # Keep static files separate from user files
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
