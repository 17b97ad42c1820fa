import json
import logging

import requests

from webservice.exceptions import MoodleException, InvalidResponse
from webservice.fieldnames import JsonFieldNames as Jn
from webservice.fieldnames import UrlPaths
from webservice.parsers import strip_mlang

log = logging.getLogger('webservice.communication')


class MoodleSessionCore(requests.Session):
    ws_path = UrlPaths.web_service

    def __init__(self, moodle_url, token=None, rest_format='json'):
        super().__init__()
        self.token = token

        if moodle_url.startswith('http://'):
            moodle_url = 'https://' + moodle_url[7:]
        if not moodle_url.startswith('https://'):
            moodle_url = 'https://' + moodle_url
        self.rest_format = rest_format
        self.url = moodle_url.rstrip('/')

    def post_web_service(self, ws_function, args=None):
        needed_args = {
            Jn.moodle_ws_rest_format: self.rest_format,
            Jn.ws_token: self.token,
            Jn.ws_function: ws_function
        }
        if args is None:
            args = needed_args
        else:
            args = dict(args, **needed_args)

        log.debug(f'calling {ws_function}')
        response = self.post(self.url + self.ws_path, args)

        if 'json' != self.rest_format:
            return response.text

        try:
            payload = json.loads(strip_mlang(response.text))
        except json.JSONDecodeError:
            log.error(f'moodle sent an unexpected response:\n {response.text}')
            raise InvalidResponse('invalid_response_exception', InvalidResponse.code,
                                  f'{ws_function} did not return json', response.text)
        if isinstance(payload, dict) and Jn.exception in payload:
            raise MoodleException.generate_exception(**payload)
        return payload


class MoodleSession(MoodleSessionCore):
    def core_enrol_get_users_courses(self, user_id):
        """
        Get the list of courses where a user is enrolled in

        :param user_id: the user id to get courses from
        :return: list of courses where the user is enrolled in.
        """
        data = {
            Jn.user_id: user_id,
        }

        return self.post_web_service('core_enrol_get_users_courses', data)

    def core_user_get_user_preferences(self, name=None, user_id=0):
        """
        Return user preferences.

        :param name: preference name, empty for all
        :param user_id: id of the user, 0 for the current user
        :return: dict with the preferences list and warnings
        """
        data = {
            Jn.user_id: user_id,
        }
        if name is not None:
            data[Jn.name] = name

        return self.post_web_service('core_user_get_user_preferences', data)

    def core_user_set_user_preferences(self, preferences):
        """
        Set user preferences.

        moodle takes these like preferences[0][name]=key, preferences[0][value]=value.

        :param preferences: list of (name, value, user_id) tuples
        :return: dict with saved preferences and warnings
        """
        data = {}
        for num, (name, value, user_id) in enumerate(preferences):
            data.update({
                Jn.preference_field.format(num, Jn.name): name,
                Jn.preference_field.format(num, Jn.value): value,
                Jn.preference_field.format(num, Jn.user_id): user_id,
            })

        return self.post_web_service('core_user_set_user_preferences', data)

    def core_webservice_get_site_info(self):
        """Requests meta data about the site and user.
        Contains the user id belonging to the token and the functions allowed by the web service.

        :return: said info
        """
        return self.post_web_service('core_webservice_get_site_info')
