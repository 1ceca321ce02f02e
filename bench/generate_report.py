#!/usr/bin/env python3
"""
Generate an HTML benchmark report for ncopy from the benchmark CSV and plot images.
"""

import os
import pandas as pd
import datetime
import platform
import subprocess
import sys

BENCH_DIR = os.path.dirname(os.path.abspath(__file__))

STYLE = """
        body { font-family: Arial, sans-serif; line-height: 1.6; margin: 0; padding: 20px; color: #333; }
        h1, h2, h3 { color: #2c3e50; }
        .container { max-width: 1200px; margin: 0 auto; }
        table { border-collapse: collapse; width: 100%; margin-bottom: 20px; }
        th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }
        th { background-color: #f2f2f2; }
        tr:nth-child(even) { background-color: #f9f9f9; }
        .plot-container { margin: 20px 0; text-align: center; }
        .plot-container img { max-width: 100%; height: auto; box-shadow: 0 4px 8px rgba(0,0,0,0.1); }
        .section { margin: 40px 0; border-top: 1px solid #eee; padding-top: 20px; }
        .highlight { background-color: #ffffcc; }
"""

def get_system_info():
    """Collect basic system information for the report."""
    info = {
        "OS": platform.system(),
        "OS Version": platform.release(),
        "Architecture": platform.machine(),
        "Python Version": platform.python_version(),
        "Date": datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
    }

    try:
        if platform.system() == "Darwin":
            cpu_info = subprocess.check_output(["sysctl", "-n", "machdep.cpu.brand_string"]).decode().strip()
            info["CPU"] = cpu_info
        elif platform.system() == "Linux":
            with open("/proc/cpuinfo") as f:
                for line in f:
                    if "model name" in line:
                        info["CPU"] = line.split(":", 1)[1].strip()
                        break
    except (OSError, subprocess.CalledProcessError):
        info["CPU"] = "Unknown"

    return info

def load_results(benchmark_csv):
    df = pd.read_csv(benchmark_csv)
    for column in ['avg_time', 'min_time', 'max_time', 'stdev']:
        df[column] = pd.to_numeric(df[column], errors='coerce')
    df = df.dropna(subset=['avg_time']).copy()
    timed = df['avg_time'] > 0
    df.loc[timed, 'throughput_MBps'] = (df.loc[timed, 'slice_size'] / (1024 * 1024)) / df.loc[timed, 'avg_time']
    return df

def write_scenario_table(f, scenario, scenario_data):
    """One row per file size, one column per implementation, fastest highlighted."""
    pivot = scenario_data.pivot_table(index='file_size_MB', columns='impl', values='avg_time', aggfunc='mean')

    f.write(f"<h3>Scenario: {scenario}</h3>\n<table>\n<tr><th>File Size (MB)</th>")
    for impl in pivot.columns:
        f.write(f"<th>{impl} (s)</th>")
    f.write("</tr>\n")

    for file_size in pivot.index:
        times = pivot.loc[file_size]
        fastest = times.idxmin() if times.notna().any() else None
        f.write(f"<tr><td>{file_size}</td>")
        for impl in pivot.columns:
            time_val = times[impl]
            if pd.isna(time_val):
                f.write("<td>-</td>")
            elif impl == fastest:
                f.write(f"<td class='highlight'><strong>{time_val:.6f}</strong></td>")
            else:
                f.write(f"<td>{time_val:.6f}</td>")
        f.write("</tr>\n")

    f.write("</table>\n")

def generate_html_report():
    """Generate an HTML report with embedded images and data tables."""
    results_dir = os.path.join(BENCH_DIR, "results")
    plots_dir = os.path.join(results_dir, "plots")
    benchmark_csv = os.path.join(results_dir, "benchmark_results.csv")
    output_report = os.path.join(results_dir, "benchmark_report.html")

    if not os.path.exists(benchmark_csv):
        print(f"Error: Benchmark results not found at {benchmark_csv}")
        return False

    try:
        df_clean = load_results(benchmark_csv)
    except (OSError, ValueError, KeyError) as e:
        print(f"Error loading benchmark data: {e}")
        return False

    if os.path.isdir(plots_dir):
        plot_files = [f for f in os.listdir(plots_dir) if f.endswith('.png')]
    else:
        plot_files = []

    system_info = get_system_info()

    with open(output_report, 'w') as f:
        f.write(f"""<!DOCTYPE html>
<html>
<head>
    <title>ncopy Benchmark Report</title>
    <style>{STYLE}    </style>
</head>
<body>
    <div class="container">
        <h1>ncopy Benchmark Report</h1>
        <p>Generated on {system_info["Date"]}</p>

        <div class="section">
            <h2>System Information</h2>
            <table>
                <tr><th>Property</th><th>Value</th></tr>
""")
        for key, value in system_info.items():
            f.write(f"                <tr><td>{key}</td><td>{value}</td></tr>\n")

        f.write("""            </table>
        </div>

        <div class="section">
            <h2>Executive Summary</h2>
            <p>This report compares ncopy, which moves one byte at a time, with dd and tail/head copying the same byte range.</p>
""")

        if not df_clean.empty:
            summary = df_clean.groupby(['impl', 'scenario']).agg({
                'avg_time': 'mean',
                'throughput_MBps': 'mean'
            }).reset_index()
            fastest_by_scenario = summary.loc[summary.groupby('scenario')['avg_time'].idxmin()]

            f.write("""
            <h3>Fastest Implementation per Scenario</h3>
            <table>
                <tr><th>Scenario</th><th>Fastest Implementation</th><th>Avg. Time (s)</th><th>Throughput (MB/s)</th></tr>
""")
            for _, row in fastest_by_scenario.iterrows():
                f.write(f"                <tr><td>{row['scenario']}</td><td><strong>{row['impl']}</strong></td>"
                        f"<td>{row['avg_time']:.6f}</td><td>{row['throughput_MBps']:.2f}</td></tr>\n")
            f.write("            </table>\n")

        f.write("""        </div>

        <div class="section">
            <h2>Benchmark Visualizations</h2>
""")
        for plot_file in sorted(plot_files):
            plot_title = plot_file.replace('.png', '').replace('_', ' ').title()
            f.write(f"""
            <div class="plot-container">
                <h3>{plot_title}</h3>
                <img src="plots/{plot_file}" alt="{plot_title}">
            </div>
""")

        f.write("""        </div>

        <div class="section">
            <h2>Scenarios</h2>
            <ul>
                <li><strong>full_file</strong>: offset 0, the whole file.</li>
                <li><strong>small_start</strong>: offset 0, <code>64k</code> bytes.</li>
                <li><strong>mid_chunk</strong>: <code>1m</code> bytes from the middle of the file.</li>
                <li><strong>tail_overrun</strong>: <code>1m</code> requested 1000 bytes before the end, a short copy.</li>
            </ul>
""")
        for scenario, scenario_data in df_clean.groupby('scenario'):
            write_scenario_table(f, scenario, scenario_data)

        f.write("""        </div>

        <div class="section">
            <h2>Raw Benchmark Data</h2>
""")
        # Limit to 20 rows to keep the HTML small
        max_rows = min(20, len(df_clean))
        f.write(df_clean.head(max_rows).to_html(index=False, float_format=lambda x: f"{x:.6f}"))
        if len(df_clean) > max_rows:
            f.write(f"<p>Showing {max_rows} rows out of {len(df_clean)} total. See the CSV file for complete data.</p>")

        f.write("""
        </div>

        <div class="section">
            <h2>Conclusions</h2>
            <ul>
""")
        pivot = df_clean.pivot_table(index=['scenario', 'file_size_MB'], columns='impl', values='avg_time') if not df_clean.empty else pd.DataFrame()
        if 'ncopy' in pivot.columns:
            for impl in pivot.columns.drop('ncopy'):
                ratio = (pivot['ncopy'] / pivot[impl]).dropna()
                if ratio.empty:
                    continue
                worst_scenario, worst_size = ratio.idxmax()
                f.write(f"<li>ncopy takes on average <strong>{ratio.mean():.1f}x</strong> as long as {impl}; "
                        f"the widest gap is <strong>{ratio.max():.1f}x</strong> in <strong>{worst_scenario}</strong> "
                        f"with <strong>{worst_size}MB</strong> files.</li>\n")

        f.write("""            </ul>
        </div>

        <div class="section">
            <p><em>Report generated automatically by the benchmark suite.</em></p>
        </div>
    </div>
</body>
</html>
""")

    print(f"Report generated successfully: {output_report}")
    return True

def main():
    """Main function to generate the report."""
    if not generate_html_report():
        print("Failed to generate report. Please check if benchmark data exists.")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
