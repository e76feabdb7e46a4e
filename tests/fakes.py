import requests


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} Error')

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        response = self.responses[params['query']]
        if isinstance(response, Exception):
            raise response
        return response


class FakeClient:
    def __init__(self, response):
        self.response = response
        self.params = []

    def wiki_request(self, params):
        self.params.append(params)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def sparql_payload(*labels, **values):
    return {'results': {'bindings': [
        {'itemLabel': {'value': label}, **{k: {'value': v} for k, v in values.items()}}
        for label in labels
    ]}}
