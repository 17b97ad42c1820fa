class JsonFieldNames:
    action = 'action'
    children = 'children'
    display = 'display'
    exception = 'exception'
    force_open = 'forceopen'
    full_name = 'fullname'
    hidden = 'hidden'
    id = 'id'
    is_active = 'isactive'
    item_id = 'itemid'
    key = 'key'
    message = 'message'
    moodle_ws_rest_format = 'moodlewsrestformat'
    name = 'name'
    preferences = 'preferences'
    preference_field = 'preferences[{:d}][{}]'
    short_name = 'shortname'
    short_text = 'shorttext'
    text = 'text'
    title = 'title'
    type = 'type'
    url = 'url'
    user_id = 'userid'
    value = 'value'
    visible = 'visible'
    warning_code = 'warningcode'
    warnings = 'warnings'
    ws_function = 'wsfunction'
    ws_token = 'wstoken'


class PreferenceNames:
    number_of_courses = 'course_overview_lite_number_of_courses'
    course_order = 'course_overview_lite_course_order'


class ConfigNames:
    default_max_courses = 'default_max_courses'
    force_default_max_courses = 'force_default_max_courses'
    highlight_prefix = 'highlight_prefix'
    preferences_file = 'preferences_file'
    token = 'token'
    url = 'url'
    user_id = 'user_id'


# navigation_node type constants, as exported by moodle.
class NodeType:
    root_node = 0
    system = 1
    category = 10
    course = 20
    container = 90


class UrlPaths:
    web_service = '/webservice/rest/server.php'
    course_view = '/course/view.php'
