"""Logging configuration.

See https://docs.djangoproject.com/en/5.1/topics/logging/
"""

from server.settings.components import config

_LOG_LEVEL = config('DJANGO_LOG_LEVEL', default='INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'level': 'INFO',
        },
        'server': {
            'level': _LOG_LEVEL,
        },
        # Keep boto chatter out of operation logs
        'botocore': {
            'level': 'WARNING',
        },
    },
}
