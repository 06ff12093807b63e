"""
Template filters for the admin screens.
"""

from . import components_bp

STATUS_BADGE_CLASSES = {
    'published': 'bg-green-100 text-green-800',
    'draft': 'bg-yellow-100 text-yellow-800',
    'archived': 'bg-gray-100 text-gray-800',
    'active': 'bg-green-100 text-green-800',
    'unsubscribed': 'bg-red-100 text-red-800',
    'pending': 'bg-yellow-100 text-yellow-800',
}
DEFAULT_BADGE_CLASS = 'bg-gray-100 text-gray-800'

EXCERPT_LENGTH = 80


@components_bp.app_template_filter('status_badge')
def status_badge(status):
    """CSS classes for a status pill"""
    value = getattr(status, 'value', status)
    return STATUS_BADGE_CLASSES.get(value, DEFAULT_BADGE_CLASS)


@components_bp.app_template_filter('short_date')
def short_date(value):
    """'Mar 5, 2024'"""
    if not value:
        return ''
    return f"{value:%b} {value.day}, {value.year}"


@components_bp.app_template_filter('numeric_date')
def numeric_date(value):
    """'3/5/2024'"""
    if not value:
        return ''
    return f"{value.month}/{value.day}/{value.year}"


@components_bp.app_template_filter('excerpt')
def excerpt(text, length=EXCERPT_LENGTH):
    if not text:
        return ''
    if len(text) > length:
        return text[:length] + '...'
    return text


@components_bp.app_template_filter('record_url')
def record_url(template, record_id):
    """Fill a configured '/path/{id}' link for one record"""
    return template.replace('{id}', str(record_id))
