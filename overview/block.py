import logging

from webservice.fieldnames import PreferenceNames as Pn
from webservice.parsers import decode_sort_order, encode_sort_order, normalize_course_id, parse_course_limit
from overview.models import SortedCourses
from overview.providers import collect_courses, EnrolmentCourseProvider, NavigationCourseProvider
from overview.sorting import resolve_limit, sort_courses
from persistence.config import DEFAULT_MAX_COURSES

log = logging.getLogger('overview.block')


def set_max_courses_preference(store, number):
    """
    Saves how many courses the user wants to see.

    :param store: a PreferenceStore
    :param number: maximum courses which should be visible
    """
    store.set(Pn.number_of_courses, str(number))


def set_course_order_preference(store, order):
    """
    Saves the users course order.

    :param store: a PreferenceStore
    :param order: sequence of course ids
    """
    store.set(Pn.course_order, encode_sort_order(order, store.order_format))


def get_sorted_courses(courses, max_courses_config, force_default, saved_order_raw, saved_limit_raw,
                       highlight_prefix):
    """
    Highlights, orders and caps a users courses.

    :param courses: mapping of course id to Course
    :param max_courses_config: the configured default limit, int-like
    :param force_default: if true the users own limit is ignored
    :param saved_order_raw: the stored course order, encoded or as list, or None
    :param saved_limit_raw: the stored user limit, int-like or None
    :param highlight_prefix: courses with this in their short name are current
    :return: (list of courses, count)
    """
    configured = parse_course_limit(max_courses_config)
    if configured is None:
        configured = DEFAULT_MAX_COURSES
    limit = resolve_limit(configured, force_default, parse_course_limit(saved_limit_raw))
    order = decode_sort_order(saved_order_raw)

    # saved orders come back with numeric ids as ints, key the courses the same way
    highlighted = {normalize_course_id(course_id): course.highlighted(highlight_prefix)
                   for course_id, course in courses.items()}
    log.debug(f'sorting {len(highlighted):d} courses, limit {limit:d}')
    return sort_courses(highlighted, limit, order)


class CourseOverview:
    def __init__(self, config, preferences, session=None, navigation=None, ajax_enabled=False):
        """
        :param config: BlockConfig
        :param preferences: PreferenceStore of the user
        :param session: MoodleSession, needed to ask moodle for enrolments
        :param navigation: exported navigation tree, dict or NavigationNode
        :param ajax_enabled: whether the renderer can load courses on its own
        """
        self.config = config
        self.preferences = preferences
        self.session = session
        self.navigation = navigation
        self.ajax_enabled = ajax_enabled

    def _providers(self):
        navigation = None
        if self.navigation is not None:
            navigation = NavigationCourseProvider(self.navigation)
        fallback = None
        if self.session is not None:
            fallback = EnrolmentCourseProvider(self.session, self.config.user_id)
        return navigation, fallback

    @property
    def max_courses(self):
        user_limit = parse_course_limit(self.preferences.get(Pn.number_of_courses))
        return resolve_limit(self.config.default_max_courses, self.config.force_default_max_courses, user_limit)

    def sorted_courses(self):
        navigation, fallback = self._providers()
        courses, ajax = collect_courses(navigation, fallback, self.ajax_enabled)
        ordered, count = get_sorted_courses(
            courses,
            self.config.default_max_courses,
            self.config.force_default_max_courses,
            self.preferences.get(Pn.course_order),
            self.preferences.get(Pn.number_of_courses),
            self.config.highlight_prefix,
        )
        return SortedCourses(ordered, count, ajax)

    def set_limit(self, number):
        set_max_courses_preference(self.preferences, number)

    def set_order(self, order):
        set_course_order_preference(self.preferences, order)
