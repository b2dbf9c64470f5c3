from .settings import *  # noqa

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'test-cache',
    }
}

# Tarefas rodam no próprio processo durante os testes
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

GIRABOT_API_KEY = 'test-key'
ZAPI_INSTANCE_ID = 'instancia-teste'
ZAPI_TOKEN = 'token-teste'
ZAPI_CLIENT_TOKEN = 'client-token-teste'

MEDIA_ROOT = BASE_DIR / 'media_test'
