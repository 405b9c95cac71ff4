"""
Validation Suite

Checks the parser and propagator boundary against published SGP4 test
vectors and cross-validates against the sgp4 library's own TLE reader.

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

import math
import unittest

import numpy as np
from sgp4.api import WGS72, Satrec

from tle_frames.conversions import eci_to_lla, lat_long_deg
from tle_frames.satellite import Satellite
from tle_frames.time_system import JulianDate, gstime
from tle_frames.tle_parser import parse_tle


# Published TEME state vectors (km, km/s)
VALLADO_CASES = {
    "00005": {  # Vanguard 1, near Earth, e = 0.186
        "line1": "1 00005U 58002B   00179.78495062  .00000023  00000-0  28098-4 0  4753",
        "line2": "2 00005  34.2682 348.7242 1859667 331.7664  19.3264 10.82419157413667",
        "test_points": [
            {"tsince": 0.0,
             "position": [7022.46529266, -1400.08296755, 0.03995155],
             "velocity": [1.893841015, 6.405893759, 4.534807250]},
            {"tsince": 360.0,
             "position": [-7154.03120202, -3783.17682504, -3536.19412294],
             "velocity": [4.741887409, -4.151817765, -2.093935425]},
        ],
    },
}

# Cross-validated against the sgp4 library only
CROSS_CHECK_TLES = {
    "04632": (  # Near Earth, normal drag
        "1 04632U 60007A   00179.90844189  .00000216  00000-0  10842-3 0  9217",
        "2 04632  58.0584  53.8479 0029762  74.2044 286.2570 14.83757089804039",
    ),
    "06251": (  # Near Earth, higher drag
        "1 06251U 62025E   06176.82412014  .00008885  00000-0  12808-3 0  3985",
        "2 06251  58.0579  54.0425 0030035 139.1568 221.1854 15.56387291  6774",
    ),
    "28057": (  # Sun-synchronous
        "1 28057U 03049A   06177.78615833  .00000060  00000-0  35940-4 0  1836",
        "2 28057  98.4283 247.6961 0000884  88.1964 271.9322 14.35478080140550",
    ),
    "11801": (  # Deep space, blank designator
        "1 11801U          80230.29629788  .00000096  00000-0  00000-0 0    13",
        "2 11801  46.7916 230.4354 7318036  47.4722  10.4117  2.28537848    13",
    ),
    "25544": (  # ISS
        "1 25544U 98067A   23259.57580000  .00012022  00000-0  21844-3 0  9995",
        "2 25544  51.6416 220.9944 0004263 122.0101 312.2755 15.49541986415598",
    ),
}


class ValidationSuite(unittest.TestCase):
    """Validation against reference values and the sgp4 library."""

    def test_vallado_cases(self):
        """Published state vectors are reproduced."""
        for sat_id, case in VALLADO_CASES.items():
            sat = Satellite.from_tle(case["line1"], case["line2"])
            for point in case["test_points"]:
                with self.subTest(satellite=sat_id, tsince=point["tsince"]):
                    position, velocity = sat.propagate(point["tsince"])

                    pos_error = np.linalg.norm(position.to_array() - np.array(point["position"]))
                    vel_error = np.linalg.norm(velocity.to_array() - np.array(point["velocity"]))

                    self.assertLess(pos_error, 1e-3,
                                    f"Position error {pos_error:.6f} km for sat {sat_id}")
                    self.assertLess(vel_error, 1e-6,
                                    f"Velocity error {vel_error:.9f} km/s for sat {sat_id}")

    def test_vanguard_epoch(self):
        elements = parse_tle(VALLADO_CASES["00005"]["line1"], VALLADO_CASES["00005"]["line2"])

        self.assertEqual(elements.epoch_year, 2000)
        self.assertAlmostEqual(elements.epoch_days_since_reference(), 18441.78495062, places=8)
        self.assertAlmostEqual(elements.ecco, 0.1859667, places=10)

    def test_elements_match_reference_reader(self):
        for sat_id, (line1, line2) in CROSS_CHECK_TLES.items():
            with self.subTest(satellite=sat_id):
                elements = parse_tle(line1, line2)
                ref = Satrec.twoline2rv(line1, line2, WGS72)

                self.assertEqual(elements.satnum, ref.satnum)
                self.assertEqual(elements.epochyr, ref.epochyr)
                self.assertAlmostEqual(elements.epochdays, ref.epochdays, places=10)
                self.assertAlmostEqual(elements.inclo, ref.inclo, places=12)
                self.assertAlmostEqual(elements.nodeo, ref.nodeo, places=12)
                self.assertAlmostEqual(elements.argpo, ref.argpo, places=12)
                self.assertAlmostEqual(elements.mo, ref.mo, places=12)
                self.assertAlmostEqual(elements.ecco, ref.ecco, places=12)
                self.assertAlmostEqual(elements.no_kozai, ref.no_kozai, places=14)
                self.assertAlmostEqual(elements.bstar, ref.bstar, places=14)
                self.assertAlmostEqual(elements.jdsatepoch.single(),
                                       ref.jdsatepoch + ref.jdsatepochF, places=6)

    def test_positions_match_reference_reader(self):
        test_times = [0.0, 30.0, 90.0, 360.0, 720.0, 1440.0]
        for sat_id, (line1, line2) in CROSS_CHECK_TLES.items():
            sat = Satellite.from_tle(line1, line2)
            ref = Satrec.twoline2rv(line1, line2, WGS72)
            for tsince in test_times:
                with self.subTest(satellite=sat_id, tsince=tsince):
                    error, r_ref, v_ref = ref.sgp4_tsince(tsince)
                    self.assertEqual(error, 0)

                    position, velocity = sat.propagate(tsince)

                    # 1 meter
                    self.assertLess(np.linalg.norm(position.to_array() - np.array(r_ref)), 1e-3)
                    self.assertLess(np.linalg.norm(velocity.to_array() - np.array(v_ref)), 1e-6)

    def test_ground_track_statistics(self):
        """Sub-satellite points over three days stay within the orbit's envelope."""
        line1, line2 = CROSS_CHECK_TLES["25544"]
        sat = Satellite.from_tle(line1, line2)
        epoch = sat.epoch

        latitudes = []
        altitudes = []
        for minutes in np.arange(0, 3 * 24 * 60, 10):
            jd = JulianDate(epoch.day, epoch.fraction + minutes / 1440.0).normalized()
            position, _ = sat.propagate_jd(jd)
            lla, _ = eci_to_lla(position, gstime(jd.single()))
            deg = lat_long_deg(lla.lat_long)

            self.assertGreater(deg.longitude, -180.0)
            self.assertLessEqual(deg.longitude, 180.0)
            latitudes.append(deg.latitude)
            altitudes.append(lla.altitude_km)

        latitudes = np.array(latitudes)
        altitudes = np.array(altitudes)

        self.assertLess(np.max(np.abs(latitudes)), 52.5)
        # Both hemispheres are visited
        self.assertGreater(np.max(latitudes), 45.0)
        self.assertLess(np.min(latitudes), -45.0)
        self.assertGreater(np.min(altitudes), 380.0)
        self.assertLess(np.max(altitudes), 450.0)
        self.assertLess(np.std(altitudes), 15.0)

    def test_orbital_period(self):
        """Consecutive ascending equator crossings are one period apart."""
        line1, line2 = CROSS_CHECK_TLES["25544"]
        sat = Satellite.from_tle(line1, line2)
        expected_period = 1440.0 / sat.elements.mean_motion_rev_per_day

        crossings = []
        previous_z = sat.propagate(0.0)[0].z
        for tsince in np.arange(0.5, 400.0, 0.5):
            z = sat.propagate(float(tsince))[0].z
            if previous_z < 0.0 <= z:
                crossings.append(float(tsince))
            previous_z = z

        self.assertGreaterEqual(len(crossings), 3)
        periods = np.diff(crossings)
        self.assertTrue(all(math.isclose(p, expected_period, abs_tol=1.0) for p in periods))


if __name__ == "__main__":
    unittest.main()
