import io
import unittest
import tempfile
from pathlib import Path

import numpy as np
import pandas as pd

from rigol_bin_reader import decode
from rigol_bin_reader.export import to_dataframe, write_csv

from synth import make_bin


class TestExport(unittest.TestCase):
    def test_dataframe_columns(self):
        out = decode(io.BytesIO(make_bin(3, 20, names=["CH1", "CH1", ""], unit_codes=[1, 1, 4])))
        df = to_dataframe(out)
        self.assertEqual(list(df.columns), ["t", "CH1", "CH1_1", "CH3"])
        self.assertEqual(len(df), 20)
        np.testing.assert_allclose(df["t"].to_numpy(), out.time_axis)
        np.testing.assert_array_equal(df["CH3"].to_numpy(), out.channels[2].samples.astype(np.float64))
        self.assertEqual(df.attrs["units"]["CH3"], "Amps (A)")

    def test_write_csv_and_refuse_overwrite(self):
        out = decode(io.BytesIO(make_bin(2, 10)))
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "sub" / "out.csv"
            write_csv(p, out)
            back = pd.read_csv(p)
            self.assertEqual(list(back.columns), ["t", "CH1", "CH2"])
            self.assertEqual(len(back), 10)
            np.testing.assert_allclose(back["CH2"].to_numpy(), out.channels[1].samples, rtol=1e-6)

            with self.assertRaises(FileExistsError):
                write_csv(p, out)


if __name__ == "__main__":
    unittest.main()
