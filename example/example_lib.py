import pprint

from scenario_data_lib import TechnicalError, iter_lines, list_available_providers, open_scenario

available_providers = list_available_providers()
print("利用可能なプロバイダー:", available_providers)
print("-" * 80)

# 読み込みたいシナリオを手動で定義する (resources/data/in/<シナリオ名>.csv など)
target_scenarios = [
    "orders",
    # "login",
]

for scenario_name in target_scenarios:
    try:
        provider = open_scenario(scenario_name)
    except TechnicalError as e:
        print(f"{scenario_name}: {e}")
        continue

    print(f"シナリオ: {scenario_name} ({provider.__class__.__name__})")
    print("カラム:", provider.get_columns())
    print("データ行数:", provider.get_nb_lines())
    # 結果カラムを除いた入力値だけを表示
    pprint.pprint(list(iter_lines(provider, include_last_column=False)))
    print("-" * 80)
