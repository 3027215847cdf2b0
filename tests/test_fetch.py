import tempfile
import unittest
from pathlib import Path
from unittest import mock

import requests

from hoopfinder.fetch import CENTERS_URL, COURTS_URL, fetch_geojson, fetch_sources


def _response(payload: dict) -> mock.Mock:
    resp = mock.Mock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


class TestFetch(unittest.TestCase):
    @mock.patch("hoopfinder.fetch.requests.get")
    def test_fetch_sources_saves_files(self, get: mock.Mock) -> None:
        get.side_effect = [
            _response({"features": [{"id": 1}, {"id": 2}]}),
            _response({"features": [{"id": 3}]}),
        ]
        with tempfile.TemporaryDirectory() as d:
            counts = fetch_sources(Path(d), timeout=5)

            self.assertEqual(counts, {"courts.geojson": 2, "centers.geojson": 1})
            self.assertTrue((Path(d) / "courts.geojson").exists())
            self.assertTrue((Path(d) / "centers.geojson").exists())

        self.assertEqual(get.call_args_list[0], mock.call(COURTS_URL, timeout=5))
        self.assertEqual(get.call_args_list[1], mock.call(CENTERS_URL, timeout=5))

    @mock.patch("hoopfinder.fetch.requests.get")
    def test_http_error_is_raised(self, get: mock.Mock) -> None:
        resp = _response({})
        resp.raise_for_status.side_effect = requests.HTTPError("503 Service Unavailable")
        get.return_value = resp

        with self.assertRaises(requests.HTTPError):
            fetch_geojson(COURTS_URL)


if __name__ == "__main__":
    unittest.main()
