# Log event codes (also returned as `errorCode` in error responses)
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
INVALID_INPUT = 'INVALID_INPUT'
ALIAS_CONFLICT = 'ALIAS_CONFLICT'
STORE_FAILURE = 'STORE_FAILURE'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
