import plotly.graph_objects as go

from geodesy import centroid, project_points


def _endpoint(x, y, label, color, symbol):
    return go.Scatter(x=[x], y=[y], mode='markers', name=label,
                      marker=dict(size=12, color=color, symbol=symbol))


def create_flight_path_plot(path, polygon=None):
    """Flight path (and survey outline, if any) in local meters around the area center"""
    fig = go.Figure()
    if not path:
        return fig

    center = centroid(polygon or path)
    xy = project_points(path, center)

    if polygon:
        ring = project_points(list(polygon) + [polygon[0]], center)
        fig.add_trace(go.Scatter(
            x=ring[:, 0], y=ring[:, 1],
            mode='lines',
            name='Survey Area',
            line=dict(color='gray', width=1, dash='dot'),
            fill='toself',
            fillcolor='rgba(128,128,128,0.1)',
        ))

    fig.add_trace(go.Scatter(
        x=xy[:, 0], y=xy[:, 1],
        mode='lines+markers',
        name='Flight Path',
        text=[f"WP {i + 1}" for i in range(len(xy))],
        hoverinfo='text',
        line=dict(color='blue', width=2),
        marker=dict(size=5),
    ))
    fig.add_trace(_endpoint(xy[0, 0], xy[0, 1], 'Start', 'green', 'star'))
    fig.add_trace(_endpoint(xy[-1, 0], xy[-1, 1], 'End', 'red', 'square'))

    fig.update_layout(
        xaxis_title="East (m)",
        yaxis_title="North (m)",
        xaxis_scaleanchor="y",
        xaxis_scaleratio=1,
        margin=dict(l=10, r=10, t=30, b=10),
    )
    return fig
