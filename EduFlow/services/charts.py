from matplotlib.figure import Figure

BAR_COLOR = '#8FAEC4'
EDGE_COLOR = '#7B9BB0'
TEXT_COLOR = '#1E3A56'
GRID_COLOR = '#C9D8E2'


def weekly_chart_figure(points, figure=None):
	"""Bar chart of completed tasks per weekday.

	`points` is Dashboard.weekly_chart() output: [(label, count), ...].
	Draws into `figure` when given (e.g. a Qt canvas figure), else a new one.
	"""
	fig = figure if figure is not None else Figure(figsize=(6, 3))
	fig.clear()
	fig.patch.set_alpha(0.0)
	ax = fig.add_subplot(111)
	ax.set_facecolor('#F7FAFC')

	x = [label for label, _ in points]
	y = [count for _, count in points]
	bars = ax.bar(x, y, color=BAR_COLOR, edgecolor=EDGE_COLOR, linewidth=1.5, alpha=0.9)

	for bar, value in zip(bars, y):
		if value > 0:
			ax.text(bar.get_x() + bar.get_width()/2, bar.get_height() + 0.05,
			        str(value), ha='center', va='bottom',
			        fontsize=9, fontweight='600', color=TEXT_COLOR)

	ax.set_ylabel("Tasks Completed", fontsize=12, fontweight='600', color=TEXT_COLOR, labelpad=10)
	ax.set_title("Completed Tasks This Week", fontsize=14, fontweight='bold', color=TEXT_COLOR, pad=15)
	# keep a visible scale on an empty week
	ax.set_ylim(bottom=0, top=max(max(y, default=0) + 1, 5))
	ax.grid(True, axis='y', alpha=0.25, linestyle='--', linewidth=0.8, color=GRID_COLOR)
	ax.set_axisbelow(True)
	ax.tick_params(axis='both', colors=TEXT_COLOR, labelsize=10)
	for spine in ['top', 'right']:
		ax.spines[spine].set_visible(False)
	for spine in ['bottom', 'left']:
		ax.spines[spine].set_color(GRID_COLOR)
		ax.spines[spine].set_linewidth(1.2)
	fig.tight_layout()
	return fig
