from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """
    Page-number pagination that lets clients choose the page size
    through the page_size query parameter.
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 200
