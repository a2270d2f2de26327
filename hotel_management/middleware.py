class AllowAllOriginsMiddleware:
    """Send ``Access-Control-Allow-Origin: *`` on every response.

    CorsMiddleware only answers requests that carry an Origin header.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        response.setdefault('Access-Control-Allow-Origin', '*')
        return response
