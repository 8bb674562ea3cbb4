"""Response matching adapter exports."""

from .api_response_matcher import ApiResponseMatcher, assert_api_response, match_api_response

__all__ = ["ApiResponseMatcher", "assert_api_response", "match_api_response"]
