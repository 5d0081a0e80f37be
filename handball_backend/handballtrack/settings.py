from pathlib import Path
from dotenv import load_dotenv
import os

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")



SECRET_KEY = os.getenv('SECRET_KEY', 'change-me-in-production')
DEBUG = os.getenv('DEBUG', 'True') == 'True'

ALLOWED_HOSTS = ['*']

INSTALLED_APPS = [
    'jazzmin',
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    # 3rd party
    'rest_framework',
    'corsheaders',
    # local apps
    'clubs',
    'seasons',
    'players',
    'teams',
    'matches',
    'stats',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'handballtrack.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'handballtrack.wsgi.application'

# DB_ENGINE=sqlite pour le dev local sans serveur MySQL
if os.getenv('DB_ENGINE', 'mysql').lower() == 'sqlite':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / os.getenv('DB_NAME', 'handballtrack.sqlite3'),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.mysql',
            'NAME': os.getenv('DB_NAME', 'handballtrack_db'),
            'USER': os.getenv('DB_USER', 'Admin'),
            'PASSWORD': os.getenv('DB_PASSWORD', 'Admin'),
            'HOST': os.getenv('DB_HOST', '127.0.0.1'),
            'PORT': os.getenv('DB_PORT', '3306'),
            'OPTIONS': {'charset': 'utf8mb4'},
        }
    }


AUTH_PASSWORD_VALIDATORS = [
    {'NAME':'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME':'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME':'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME':'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.getenv('TIME_ZONE', 'Europe/Madrid')
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

REST_FRAMEWORK = {
    'DEFAULT_PAGINATION_CLASS': 'rest_framework.pagination.PageNumberPagination',
    'PAGE_SIZE': 25,
    'DEFAULT_PERMISSION_CLASSES': ['rest_framework.permissions.AllowAny'],
    'EXCEPTION_HANDLER': 'handballtrack.exceptions.api_exception_handler',
}

# CORS
CORS_ALLOW_ALL_ORIGINS = False
origins = os.getenv('ALLOWED_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173')
CORS_ALLOWED_ORIGINS = [o.strip() for o in origins.split(',') if o.strip()]


def _env_limit(name, default):
    try:
        value = int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


# Dashboard
DASHBOARD_PENDING_MATCH_LIMIT = _env_limit('DASHBOARD_PENDING_MATCH_LIMIT', 5)
DASHBOARD_RECENT_MATCH_LIMIT = _env_limit('DASHBOARD_RECENT_MATCH_LIMIT', 5)


LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'simple'},
    },
    'root': {'handlers': ['console'], 'level': 'WARNING'},
    'loggers': {
        'django': {'handlers': ['console'], 'level': 'WARNING', 'propagate': False},
        'handballtrack': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'clubs': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'seasons': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'players': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'teams': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'matches': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'stats': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}


JAZZMIN_SETTINGS = {
    "site_title": "Handball Tracker Admin",
    "site_header": "Handball Tracker",
    "site_brand": "Handball Tracker",
    "welcome_sign": "Dashboard",
    "copyright": "Handball Tracker",

    "topmenu_links": [
        {"name": "Home", "url": "admin:index", "permissions": ["auth.view_user"]},
        {"app": "clubs"},
        {"app": "teams"},
        {"app": "players"},
        {"app": "matches"},
    ],

    "order_with_respect_to": [
        "clubs", "seasons", "teams", "players", "matches", "auth"
    ],

    # Icônes FontAwesome
    "icons": {
        "auth": "fas fa-shield-alt",
        "auth.Group": "fas fa-users-cog",
        "auth.User": "fas fa-user",
        "clubs.Club": "fas fa-flag",
        "seasons.Season": "fas fa-calendar",
        "teams.Team": "fas fa-users",
        "teams.PlayerTeamSeason": "fas fa-id-badge",
        "players.Player": "fas fa-user",
        "matches.Match": "fas fa-calendar-check",
        "matches.GameEvent": "fas fa-stopwatch",
    },

    "show_ui_builder": False,
    "changeform_format": "horizontal_tabs",
    "related_modal_active": True,
    "show_sidebar": True,
}

JAZZMIN_UI_TWEAKS = {
    "theme": "flatly",
    "dark_mode_theme": None,
    "navbar": "navbar-white navbar-light",
    "sidebar": "sidebar-dark-primary",
    "brand_colour": "navbar-primary",
    "accent": "accent-primary",
    "fixed_sidebar": True,
    "sidebar_nav_small_text": False,
    "sidebar_nav_flat_style": False,
    "login_logo": None,
}
