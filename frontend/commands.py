import json
import logging
import sys

from frontend.cmdparser import ParserManager, Argument
from overview.block import CourseOverview
from persistence.config import load_config
from persistence.preferences import JsonFilePreferenceStore, WebServicePreferenceStore
from webservice.communication import MoodleSession
from webservice.exceptions import MoodleException
from webservice.fieldnames import ConfigNames as Cn
from webservice.fieldnames import JsonFieldNames as Jn

log = logging.getLogger('frontend.commands')
pm = ParserManager('course-overview', 'sub command help')


def make_parser():
    return pm.parser


def _session(config):
    session = MoodleSession(moodle_url=config.url, token=config.token)
    if config.get(Cn.user_id, None) is None:
        # the token belongs to exactly one user, moodle tells us who that is
        site_info = session.core_webservice_get_site_info()
        config.add_overrides({Cn.user_id: site_info[Jn.user_id]})
        log.debug(f'using user id {config.user_id} from site info')
    return session


def _overview(navigation=None, ajax=False, config=None):
    config = config or load_config()
    session = None
    if config.preferences_file is not None:
        preferences = JsonFilePreferenceStore(config.preferences_file)
        if config.get(Cn.url, None) is not None:
            session = _session(config)
    else:
        session = _session(config)
        preferences = WebServicePreferenceStore(session, config.user_id)

    tree = None
    if navigation is not None:
        with open(navigation) as file:
            tree = json.load(file)
    return CourseOverview(config, preferences, session=session, navigation=tree, ajax_enabled=ajax)


@pm.command(
    'list your courses in overview order',
    Argument('-n', '--navigation', help='exported navigation tree (json) to read courses from'),
    Argument('--ajax', help='leave a collapsed course list to the renderer', action='store_true')
)
def courses(navigation=None, ajax=False):
    result = _overview(navigation, ajax).sorted_courses()
    if result.ajax:
        print('course list is loaded on demand.')
        return result
    for course in result.courses:
        print(course)
    print(f'{result.count:d} courses')
    return result


@pm.command(
    'set how many courses are shown, 0 shows all',
    Argument('number', type=int, help='maximum number of courses')
)
def limit(number):
    if number < 0:
        raise SystemExit('the limit can not be negative.')
    _overview().set_limit(number)
    print(f'showing up to {number:d} courses.' if number else 'showing all courses.')


@pm.command(
    'set the order of your courses',
    Argument('course_ids', nargs='+', type=int, help='course ids, first is shown on top')
)
def order(course_ids):
    _overview().set_order(course_ids)
    print('saved order: ' + ' '.join(str(c) for c in course_ids))


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)
    kwargs = vars(args)
    if 'func' not in kwargs:
        parser.print_help()
        raise SystemExit(1)
    func = kwargs.pop('func')
    func(**kwargs)


def main_entry():
    try:
        main()
    except KeyboardInterrupt:
        print('exiting…')
        sys.exit(1)
    except MoodleException as e:
        print(e)
        raise SystemExit(1)
