import json
import pytest
from core.evaluation_types import CostResult
from core.exceptions import GridFormatError
from inout.costs_json import from_json_dict, read_costs, to_json_dict, write_costs

def test_document_layout(synthetic_table):
    doc = to_json_dict(synthetic_table)
    assert doc["metadata"]["k"] == {"min": 0.1, "max": 0.3, "step": 0.1, "values": [0.1, 0.2, 0.3]}
    assert doc["metadata"]["sigma"]["values"] == [1.0, 1.5, 2.0]
    assert len(doc["data"]) == 3 and len(doc["data"][0]) == 3
    assert doc["data"][2][1] == {"affineCost": 21.0, "nonlinCost": 11.0,
                                 "lowerBound": 2.0, "lambda": 2.1}
    assert doc["data"][1][1] is None

def test_write_and_read(tmp_path, synthetic_table):
    path = write_costs(synthetic_table, tmp_path / "out" / "costs.json")
    assert path.exists()
    with open(path) as f:
        assert "metadata" in json.load(f)
    table = read_costs(path)
    assert table.shape == (3, 3)
    assert table.cells == synthetic_table.cells
    assert table.get(0.2, 1.5) is None

def test_cost_result_dict_keys():
    res = CostResult(lam=0.25, affine_cost=1.5, nonlin_cost=0.75, lower_bound=0.5)
    assert res.to_dict() == {"affineCost": 1.5, "nonlinCost": 0.75, "lowerBound": 0.5, "lambda": 0.25}
    assert CostResult.from_dict(res.to_dict()) == res

def _doc(**overrides):
    doc = {
        "metadata": {
            "k": {"min": 0.1, "max": 0.2, "step": 0.1, "values": [0.1, 0.2]},
            "sigma": {"min": 1.0, "max": 1.0, "step": 0.1, "values": [1.0]},
        },
        "data": [[{"affineCost": 1, "nonlinCost": 1, "lowerBound": 0, "lambda": 0.5}], [None]],
    }
    doc.update(overrides)
    return doc

def test_valid_document():
    table = from_json_dict(_doc())
    assert table.lookup(0.1, 1.0).lam == 0.5

@pytest.mark.parametrize("doc", [
    [],
    {"data": []},
    _doc(metadata={"k": {"min": 0.1, "max": 0.2, "step": 0.1}}),
    _doc(metadata={"k": {"min": 0.1, "max": 0.2}, "sigma": {"min": 1.0, "max": 1.0, "step": 0.1}}),
    _doc(metadata={"k": {"min": 0.1, "max": 0.2, "step": 0.1, "values": [0.1]},
                   "sigma": {"min": 1.0, "max": 1.0, "step": 0.1}}),
    _doc(data=[[None]]),
    _doc(data="not a grid"),
    _doc(data=[[{"affineCost": 1}], [None]]),
])
def test_malformed_documents(doc):
    with pytest.raises(GridFormatError):
        from_json_dict(doc)

def test_read_missing_or_invalid_file(tmp_path):
    with pytest.raises(GridFormatError):
        read_costs(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(GridFormatError):
        read_costs(bad)
