"""
Экспорт блок-схемы в JSON и HTML
"""

import json
import html
from pathlib import Path
from typing import Dict, List, Any

from .models import FlowGraph, VisualKind


NODE_COLORS = {
    VisualKind.ACCENT_A.value: "#3b82f6",  # Синий - заголовок документа
    VisualKind.ACCENT_B.value: "#10b981",  # Зелёный - разделы и абзацы
    VisualKind.ACCENT_C.value: "#f59e0b",  # Жёлтый - списки
}
DEFAULT_NODE_COLOR = "#6b7280"


def graph_to_json(graph: FlowGraph) -> str:
    return json.dumps(graph.to_dict(), ensure_ascii=False, indent=2)


def export_json(graph: FlowGraph, output_path: Path) -> Path:
    """Экспортировать схему в JSON файл"""
    output_path = Path(output_path)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(graph_to_json(graph))
    return output_path


def to_cytoscape_elements(graph: FlowGraph) -> List[Dict[str, Any]]:
    """Конвертировать в элементы Cytoscape.js"""
    elements = []

    for node in graph.nodes:
        elements.append({
            "data": {
                "id": node.id,
                "label": node.label,
                "description": node.description,
                "color": NODE_COLORS.get(node.visual_kind.value, DEFAULT_NODE_COLOR),
            }
        })

    for edge in graph.edges:
        elements.append({
            "data": {
                "id": edge.edge_id,
                "source": edge.source,
                "target": edge.target,
                "label": edge.label.value,
            }
        })

    return elements


def generate_html_viewer(graph: FlowGraph, title: str = "Flowchart") -> str:
    """Генерация HTML визуализатора с Cytoscape.js (раскладка dagre)"""
    elements_json = json.dumps(to_cytoscape_elements(graph), ensure_ascii=False)
    # Не даём тексту закрыть тег <script>
    elements_json = elements_json.replace("</", "<\\/")
    safe_title = html.escape(title)

    return f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{safe_title}</title>
    <script src="https://cdnjs.cloudflare.com/ajax/libs/cytoscape/3.28.1/cytoscape.min.js"></script>
    <script src="https://cdnjs.cloudflare.com/ajax/libs/dagre/0.8.5/dagre.min.js"></script>
    <script src="https://cdn.jsdelivr.net/npm/cytoscape-dagre@2.5.0/cytoscape-dagre.min.js"></script>
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            background: #f9fafb;
            height: 100vh;
            overflow: hidden;
        }}
        .container {{ display: flex; height: 100vh; }}
        #cy {{ flex: 1; }}
        .sidebar {{
            width: 320px;
            background: #fff;
            padding: 20px;
            overflow-y: auto;
            border-left: 1px solid #e5e7eb;
        }}
        .sidebar h1 {{ font-size: 1.2em; margin-bottom: 15px; }}
        .info-panel {{ white-space: pre-wrap; font-size: 0.9em; color: #374151; }}
    </style>
</head>
<body>
    <div class="container">
        <div id="cy"></div>
        <div class="sidebar">
            <h1>{safe_title}</h1>
            <div class="info-panel" id="info-panel">Click a node to see its full text</div>
        </div>
    </div>
    <script>
        const elements = {elements_json};

        const cy = cytoscape({{
            container: document.getElementById('cy'),
            elements: elements,
            style: [
                {{
                    selector: 'node',
                    style: {{
                        'label': 'data(label)',
                        'background-color': 'data(color)',
                        'color': '#fff',
                        'shape': 'round-rectangle',
                        'width': 180,
                        'height': 60,
                        'text-wrap': 'wrap',
                        'text-max-width': 160,
                        'text-valign': 'center',
                        'font-size': 12
                    }}
                }},
                {{
                    selector: 'edge',
                    style: {{
                        'label': 'data(label)',
                        'curve-style': 'bezier',
                        'target-arrow-shape': 'triangle',
                        'line-color': '#9ca3af',
                        'target-arrow-color': '#9ca3af',
                        'font-size': 10
                    }}
                }}
            ],
            layout: {{ name: 'dagre', rankDir: 'TB', nodeSep: 80, rankSep: 100 }}
        }});

        cy.on('tap', 'node', function(evt) {{
            document.getElementById('info-panel').textContent = evt.target.data('description');
        }});
    </script>
</body>
</html>
'''


def export_html(graph: FlowGraph, output_path: Path, title: str = "Flowchart") -> Path:
    """Экспортировать схему в HTML файл с встроенным визуализатором"""
    output_path = Path(output_path)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(generate_html_viewer(graph, title))
    return output_path
