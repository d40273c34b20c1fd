"""
Protocol constants for the unit's UDP discovery and HTTP control endpoints
"""

# UDP discovery
DISCOVERY_LOCAL_PORT = 30000
DISCOVERY_PORT = 30050
DISCOVERY_PAYLOAD = b"DAIKIN_UDP/common/basic_info"

# HTTP endpoints
URI_GET_BASIC_INFO = "/common/basic_info"
URI_GET_REMOTE_METHOD = "/common/get_remote_method"
URI_GET_MODEL_INFO = "/aircon/get_model_info"
URI_GET_CONTROL_INFO = "/aircon/get_control_info"
URI_SET_CONTROL_INFO = "/aircon/set_control_info"
URI_GET_SENSOR_INFO = "/aircon/get_sensor_info"
URI_GET_TIMER = "/aircon/get_timer"
URI_GET_PRICE = "/aircon/get_price"
URI_GET_TARGET = "/aircon/get_target"
URI_GET_WEEK_POWER = "/aircon/get_week_power"
URI_GET_YEAR_POWER = "/aircon/get_year_power"
URI_GET_PROGRAM = "/aircon/get_program"
URI_GET_SCDLTIMER = "/aircon/get_scdltimer"
URI_GET_NOTIFY = "/aircon/get_notify"

# ret codes
RETURN_OK = "OK"
RETURN_BAD = "PARAM NG"

DEFAULT_REQUEST_TIMEOUT = 5.0
