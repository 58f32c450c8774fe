"""
Progressive web app routes: manifest, service worker and offline page.
"""

from flask import jsonify, render_template, make_response, url_for, current_app, Blueprint

pwa_bp = Blueprint('pwa', __name__)

# Pre-cached by the service worker on install. No pages here: navigations
# are network-first with an offline fallback.
STATIC_ASSETS = [
    '/offline',
    '/manifest.json',
    '/static/css/style.css',
    '/static/js/map.js',
    '/static/icons/icon.svg',
]


@pwa_bp.route('/manifest.json')
def manifest():
    """Web app manifest."""
    config = current_app.config
    return jsonify({
        'name': config['APP_NAME'],
        'short_name': config['APP_NAME'],
        'description': config.get('APP_DESCRIPTION', ''),
        'start_url': '/',
        'scope': '/',
        'display': 'standalone',
        'theme_color': config['PWA_THEME_COLOR'],
        'background_color': config['PWA_BACKGROUND_COLOR'],
        'lang': 'ru',
        'icons': [
            {
                'src': url_for('static', filename='icons/icon.svg'),
                'sizes': 'any',
                'type': 'image/svg+xml',
                'purpose': 'any maskable'
            },
        ]
    })


@pwa_bp.route('/sw.js')
def service_worker():
    """Service worker script, served from the root scope."""
    script = render_template(
        'sw.js',
        cache_version=current_app.config['SW_CACHE_VERSION'],
        static_assets=STATIC_ASSETS
    )
    response = make_response(script)
    response.headers['Content-Type'] = 'application/javascript'
    response.headers['Service-Worker-Allowed'] = '/'
    response.headers['Cache-Control'] = 'no-cache'
    return response


@pwa_bp.route('/offline')
def offline():
    """Fallback page shown by the service worker without network."""
    return render_template('offline.html')
