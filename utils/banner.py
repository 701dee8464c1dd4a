import os
from sqlalchemy.engine import make_url
from .constants import APP_NAME

_banner_shown = False

BANNER = r"""
 _ _ _                 _
| (_) | ___        ___| |_ ___  _ __ ___
| | | |/ _ \ _____/ __| __/ _ \| '__/ _ \
| | | | (_) |_____\__ \ || (_) | | |  __/
|_|_|_|\___/      |___/\__\___/|_|  \___|
"""

def describe_integrations(config):
    """One line per optional collaborator, with passwords masked"""
    database = make_url(config['SQLALCHEMY_DATABASE_URI']).render_as_string(hide_password=True)
    admins = config.get('ADMIN_EMAILS') or []
    google = 'enabled' if config.get('GOOGLE_CLIENT_ID') and config.get('GOOGLE_CLIENT_SECRET') else 'not configured'
    mail = config.get('MAIL_SERVER') or 'disabled'

    return [
        ('Database', database),
        ('Admins', f"{len(admins)} allowlisted"),
        ('Google', google),
        ('Mail', mail),
        ('Base URL', config.get('BASE_URL')),
    ]

def print_startup_banner(app):
    """Print build info and the active integrations, once per process"""
    global _banner_shown

    if _banner_shown:
        return
    _banner_shown = True

    # Injected by the container build
    build = os.environ.get('GIT_HASH', 'dev')[:8]
    build_time = os.environ.get('BUILD_TIME')
    if build_time:
        build = f"{build} ({build_time})"

    print("\033[96m" + BANNER + "\033[0m")
    print(f"\033[92m{APP_NAME}\033[0m build {build}")
    for label, value in describe_integrations(app.config):
        print(f"   {label + ':':<10} {value}")
    print()
