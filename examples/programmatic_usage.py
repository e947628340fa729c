"""Drive the tool contract from Python, the way an LLM dispatcher would."""

from tabular_agent import AnalysisSession
from tabular_agent.core import format_result
from tabular_agent.logging import setup_logging


def main():
    setup_logging("INFO")

    # 1. A session owns its own registry (at most 3 datasets by default)
    session = AnalysisSession.create()

    # 2. Rows parsed by any upload adapter can be registered directly
    session.add_rows(
        "ventas.csv",
        [
            {"ciudad": "Cali", "monto": "120"},
            {"ciudad": "Bogota", "monto": "340"},
            {"ciudad": "Cali", "monto": ""},
            {"ciudad": "Pasto", "monto": "75"},
        ],
    )

    # 3. This is the context the LLM sees before each turn
    print(session.prompt("Which city sells the most?"))
    print()

    # 4. Tool calls, exactly as the LLM would emit them
    calls = [
        ("getDatasetStats", {"dataset_id": "ventas.csv"}),
        ("cleanDataset", {"dataset_id": "ventas.csv", "action": "fill_mean", "columns": ["monto"]}),
        ("queryDataset", {"dataset_id": "ventas.csv", "sort_by": "monto", "limit": 2}),
        ("analyzeColumn", {"dataset_id": "ventas.csv", "column_name": "ciudad", "analysis_type": "frequency"}),
        ("renderChart", {"type": "bar", "title": "Monto por ciudad", "xAxisKey": "ciudad", "seriesKeys": ["monto"]}),
        # a wrong column is a hard failure the agent is told about
        ("analyzeColumn", {"dataset_id": "ventas.csv", "column_name": "precio", "analysis_type": "frequency"}),
    ]
    for name, arguments in calls:
        result = session.call(name, **arguments)
        print(f"{name} [{result.kind.value}]: {format_result(result)}")

    # 5. Open-data catalog (needs network access)
    # result = session.call("fetchDataset", catalog_id="abcd-1234", limit=500)


if __name__ == "__main__":
    main()
