"""
Blog management list: posts filtered by status, delete with confirmation.
"""

from ...core.models import ALL, PostStatus, parse_status_filter
from ...core.screen import ListScreen


class BlogScreen(ListScreen):
    source = 'blog'
    entity_label = 'blog post'
    load_error_message = 'Failed to load blogs'
    delete_success_message = 'Blog post deleted successfully'
    delete_error_message = 'Failed to delete blog post'
    delete_title = 'Delete Blog Post'
    delete_message = 'Are you sure you want to delete this blog post? This action cannot be undone.'

    status_choices = [(ALL, 'All Status')] + [(s.value, s.value.title()) for s in PostStatus]

    def __init__(self, client, notifier, status_filter=ALL):
        super().__init__(client, notifier)
        self.status = parse_status_filter(status_filter, PostStatus)

    @property
    def status_filter(self):
        return self.status.value if self.status else ALL

    @property
    def blogs(self):
        return self.rows

    @property
    def is_empty(self):
        return not self.rows

    def query(self):
        return {'status': self.status_filter}

    def set_status_filter(self, value):
        self.status = parse_status_filter(value, PostStatus)
        return self.refresh()

    def _fetch(self, query):
        return self.client.list_blogs(query['status'])

    def _apply(self, result):
        self.rows = list(result)

    def _delete(self, record_id):
        self.client.delete_blog(record_id)

    def request_delete_post(self, post):
        self.request_delete(post.id, post.title)
