"""Web-based graph visualization using pyvis."""

from pathlib import Path

from pyvis.network import Network

from .store import ItemGraph


# Color scheme for node types
NODE_COLORS = {
    "item": "#FCE38A",  # Yellow
    "attribute": "#95E1D3",  # Light green
    "tier": "#AA96DA",  # Purple
    "set": "#F38181",  # Coral
    "slot": "#45B7D1",  # Blue
}

NODE_SIZES = {
    "item": 25,
    "attribute": 15,
    "tier": 20,
    "set": 20,
    "slot": 20,
}


def edge_width(amount: float | None) -> float:
    """Thicker edges for larger amounts, capped to keep the layout readable."""
    if not amount:
        return 1
    return min(1 + amount / 5, 6)


def create_web_visualization(
    graph: ItemGraph,
    output_path: Path = Path("output/graph.html"),
    height: str = "900px",
    width: str = "100%",
) -> Path:
    """Create an interactive web visualization of the graph.

    Args:
        graph: ItemGraph instance
        output_path: Where to save the HTML file
        height: Height of the visualization
        width: Width of the visualization

    Returns:
        Path to the generated HTML file
    """
    net = Network(
        height=height,
        width=width,
        bgcolor="#1a1a2e",
        font_color="white",
        directed=True,
        select_menu=True,
        filter_menu=True,
    )

    net.set_options("""
    {
        "physics": {
            "forceAtlas2Based": {
                "gravitationalConstant": -100,
                "centralGravity": 0.01,
                "springLength": 150,
                "springConstant": 0.02
            },
            "solver": "forceAtlas2Based",
            "stabilization": {
                "iterations": 100
            }
        },
        "interaction": {
            "hover": true,
            "navigationButtons": true
        }
    }
    """)

    rows = graph.to_node_link()

    for node in rows["nodes"]:
        node_type = node.get("type") or "unknown"
        name = node.get("name", node["id"])

        tooltip = f"<b>{name}</b><br>Type: {node_type}"
        if node.get("description"):
            tooltip += f"<br>{node['description']}"
        if node_type == "item":
            tooltip += f"<br>Weight: {node.get('weight')}<br>Value: {node.get('value')}"

        net.add_node(
            node["id"],
            label=name,
            title=tooltip,
            color=NODE_COLORS.get(node_type, "#888888"),
            size=NODE_SIZES.get(node_type, 15),
            group=node_type,
        )

    for link in rows["links"]:
        amount = link.get("amount")
        net.add_edge(
            link["source"],
            link["target"],
            title=f"amount: {amount}" if amount is not None else "",
            width=edge_width(amount),
        )

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    net.save_graph(str(output_path))

    return output_path
