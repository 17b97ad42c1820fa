import logging
from urllib.parse import urlencode

from webservice.fieldnames import NodeType, UrlPaths
from webservice.models import CourseListResponse
from overview.models import Course, NavigationNode

log = logging.getLogger('overview.providers')

MY_COURSES = 'mycourses'


class CourseProvider:
    def courses(self):
        """:return: dict of course id to Course, in display order."""
        raise NotImplementedError


class NavigationCourseProvider(CourseProvider):
    """Reads the courses from the "my courses" branch of a navigation tree."""

    def __init__(self, navigation):
        if not isinstance(navigation, NavigationNode):
            navigation = NavigationNode(navigation)
        self.navigation = navigation

    @property
    def my_courses(self):
        """The mycourses node, if the tree root is a usable system node."""
        root = self.navigation
        if not root.display and not root.contains_active_node():
            return None
        if root.type != NodeType.system or not root.action:
            return None
        my = root.child(MY_COURSES)
        if my is None or not my.children:
            return None
        return my

    @property
    def expanded(self):
        my = self.my_courses
        return my is not None and my.force_open

    @property
    def available(self):
        return self.my_courses is not None

    def courses(self):
        my = self.my_courses
        if my is None:
            return {}
        courses = {}
        for node in my.find_all_of_type(NodeType.course):
            course = Course.create(node.key, node.title, node.short_text, node.action, node.hidden)
            courses[course.id] = course
        log.debug(f'found {len(courses):d} courses in navigation')
        return courses


class EnrolmentCourseProvider(CourseProvider):
    """Asks moodle for the courses the user is enrolled in."""

    def __init__(self, session, user_id):
        self.session = session
        self.user_id = user_id

    def course_url(self, course_id):
        return f'{self.session.url}{UrlPaths.course_view}?{urlencode({"id": course_id})}'

    def courses(self):
        wrapped = CourseListResponse(self.session.core_enrol_get_users_courses(self.user_id))
        courses = {}
        for raw in wrapped:
            course = Course.create(raw.id, raw.full_name, raw.short_name,
                                   self.course_url(raw.id), hidden=raw.visible == 0)
            courses[course.id] = course
        log.debug(f'user {self.user_id} is enrolled in {len(courses):d} courses')
        return courses


def collect_courses(navigation=None, fallback=None, ajax_enabled=False):
    """
    Picks where the course list comes from.

    Without a navigation tree the fallback provider is asked. A tree without a
    usable "my courses" branch yields no courses. An expanded branch is used as
    is. If the branch is collapsed and ajax is enabled, nothing is collected and
    the renderer loads the list itself. Otherwise the fallback provider is asked.

    :param navigation: a NavigationCourseProvider, or None
    :param fallback: any CourseProvider, usually an EnrolmentCourseProvider
    :param ajax_enabled: whether the renderer can load courses on its own
    :return: (dict of course id to Course, ajax)
    """
    if navigation is not None:
        if not navigation.available:
            return {}, False
        if navigation.expanded:
            return navigation.courses(), False
        if ajax_enabled:
            return {}, True
    if fallback is None:
        return {}, False
    return fallback.courses(), False
