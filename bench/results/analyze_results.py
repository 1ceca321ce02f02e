import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import os
import numpy as np

RESULTS_DIR = os.path.dirname(os.path.abspath(__file__))
PLOTS_DIR = os.path.join(RESULTS_DIR, "plots")

# Load results
results_file = os.path.join(RESULTS_DIR, "benchmark_results.csv")
if not os.path.exists(results_file):
    print(f"Error: Results file not found: {results_file}")
    exit(1)

df = pd.read_csv(results_file)

# FAIL/MISSING become NaN
df = df.replace(["FAIL", "MISSING"], np.nan)
for column in ['avg_time', 'min_time', 'max_time', 'stdev']:
    df[column] = pd.to_numeric(df[column], errors='coerce')

df_clean = df.dropna(subset=['avg_time']).copy()

df_clean['throughput_MBps'] = (df_clean['slice_size'] / (1024 * 1024)) / df_clean['avg_time']

os.makedirs(PLOTS_DIR, exist_ok=True)

sns.set(style="whitegrid", palette="colorblind", font_scale=1.2)


def line_plot(scenario, title, xlabel, filename):
    plt.figure(figsize=(12, 7))
    scenario_df = df_clean[df_clean['scenario'] == scenario]
    if not scenario_df.empty:
        sns.lineplot(
            data=scenario_df,
            x="file_size_MB",
            y="avg_time",
            hue="impl",
            marker="o",
            linewidth=2.5
        )
        plt.title(title, fontsize=16)
        plt.xlabel(xlabel, fontsize=14)
        plt.ylabel("Execution Time (seconds)", fontsize=14)
        plt.yscale("log")
        plt.xticks(sorted(df_clean['file_size_MB'].unique()))
        plt.legend(title="Implementation", fontsize=12, title_fontsize=13)
        plt.tight_layout()
        plt.savefig(os.path.join(PLOTS_DIR, filename))
    plt.close()


line_plot("full_file", "ncopy Performance - Copying Entire File",
          "File Size (MB)", "time_by_file_size.png")
line_plot("small_start", "Performance Copying 64KB from Start",
          "Source File Size (MB)", "small_copy_performance.png")
line_plot("tail_overrun", "Short Copy at End of File",
          "Source File Size (MB)", "tail_overrun_performance.png")

# --- Throughput for the 1MB chunk from the middle of the file ---
plt.figure(figsize=(14, 8))
mid_chunk_df = df_clean[df_clean['scenario'] == 'mid_chunk']
if not mid_chunk_df.empty:
    mid_chunk_df = mid_chunk_df.sort_values('throughput_MBps', ascending=False)
    sns.barplot(
        data=mid_chunk_df,
        x="impl",
        y="throughput_MBps",
        hue="file_size_MB",
        palette="viridis",
        errorbar=None
    )
    plt.title("Throughput - 1MB Chunk from Middle of File", fontsize=16)
    plt.xlabel("Implementation", fontsize=14)
    plt.ylabel("Throughput (MB/s)", fontsize=14)
    plt.legend(title="File Size (MB)", fontsize=12, title_fontsize=13)
    plt.tight_layout()
    plt.savefig(os.path.join(PLOTS_DIR, "throughput_comparison.png"))
plt.close()

print("\nPerformance Summary:")
print("-" * 80)

summary = df_clean.groupby(['impl', 'scenario']).agg({
    'avg_time': ['mean', 'min', 'max'],
    'stdev': 'mean',
    'throughput_MBps': ['mean', 'max']
}).reset_index()
print(summary)

summary_file = os.path.join(RESULTS_DIR, "performance_summary.csv")
summary.to_csv(summary_file)
print(f"Summary saved to {summary_file}")

# How much slower the byte-at-a-time copy is than each reference tool
print("\nncopy Slowdown vs Reference Tools:")
print("-" * 80)
pivot = df_clean.pivot_table(index=['scenario', 'file_size_MB'], columns='impl', values='avg_time')
if 'ncopy' in pivot.columns:
    for impl in pivot.columns.drop('ncopy'):
        ratio = (pivot['ncopy'] / pivot[impl]).dropna()
        if not ratio.empty:
            print(f"{impl}: ncopy takes {ratio.mean():.1f}x as long on average (max {ratio.max():.1f}x)")

print(f"\nAnalysis complete. Plots saved to {PLOTS_DIR}")
