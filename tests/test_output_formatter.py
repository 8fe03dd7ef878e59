import json

import pytest

from route_terrain.outputs.output_formatter import (
    analysis_to_dict,
    make_course_overview_table,
    make_segments_table,
)
from route_terrain.pipeline import analyze_route, attach_insights


def test_course_overview_table(mock_route_points):
    res = analyze_route(mock_route_points)

    df = make_course_overview_table(res)

    assert list(df.columns) == [
        "distance_miles",
        "total_gain_ft",
        "total_loss_ft",
        "num_segments",
        "increment",
    ]
    assert len(df) == 1
    assert df.loc[0, "num_segments"] == 5


def test_segments_table(mock_route_points):
    res = analyze_route(mock_route_points, unit="kilometers")

    df = make_segments_table(res)

    assert len(df) == 8
    assert "start_kilometers" in df.columns
    assert df["terrain"].iloc[0] == "Relatively flat"
    assert (df["gain_ft"] >= 0).all()


def test_segments_table_empty_route():
    df = make_segments_table(analyze_route([]))

    assert df.empty
    assert "avg_grade_pct" in df.columns


def test_analysis_to_dict(mock_route_points):
    res = attach_insights(analyze_route(mock_route_points), "<p>Go easy early.</p>")

    payload = analysis_to_dict(res, include_points=True)

    assert payload["totalDistance"] == pytest.approx(5.0, abs=1e-3)
    assert payload["unit"] == "miles"
    assert payload["increment"] == 1.0
    assert payload["segments"][2]["description"] == "Moderate climb"
    assert set(payload["segments"][0]) == {
        "startDistance",
        "endDistance",
        "elevationGain",
        "elevationLoss",
        "avgGrade",
        "description",
    }
    assert payload["points"][-1] == {
        "lat": mock_route_points[-1].latitude,
        "lng": mock_route_points[-1].longitude,
        "elevation": 130.0,
        "distance": 8047.0,
    }
    assert payload["aiCoachingInsights"] == "<p>Go easy early.</p>"

    # serializable as-is
    json.dumps(payload)


def test_analysis_to_dict_omits_optional_fields(mock_route_points):
    payload = analysis_to_dict(analyze_route(mock_route_points))

    assert "points" not in payload
    assert "aiCoachingInsights" not in payload
