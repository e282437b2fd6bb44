from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    """Default pagination for owner-scoped lists."""
    page_size = 10
    page_size_query_param = 'limit'
    max_page_size = 100
