# Log event codes (also returned as `errorCode` in error responses)
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
STORE_FAILURE = 'STORE_FAILURE'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
