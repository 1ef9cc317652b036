#File: services/prompts.py
from typing import Dict

SYSTEM_PROMPTS: Dict[str, str] = {
    "analysis": """You are an expert NASA bioscience research analyst.
You produce comprehensive, well-structured analyses of NASA bioscience experiment publications.
You must use the exact main section headings you are given.""",

    "quick_summary": """You are a science communicator summarising NASA bioscience experiments for a search results page.
Keep answers short and factual.""",
}

PROMPT_TEMPLATES: Dict[str, str] = {
    "experiment_analysis": """Analyze the following NASA bioscience experiment publication and provide a comprehensive, well-structured analysis.

**Experiment Title:** {title}

**Authors:** {authors}

**Publication Link:** {link}

Please provide a detailed analysis in the following structured format using markdown with tables, bullet points, and clear organization. **You MUST include all the main section headings exactly as listed below, even if you leave the content of a section blank.**

## EXECUTIVE SUMMARY
Provide 2-3 comprehensive paragraphs covering:
- **Overview**: What was studied and why it matters
- **Key Findings**: Most significant results and discoveries
- **Impact**: Implications for space bioscience and human spaceflight

Use bold text for emphasis on critical findings.

---

## EXPERIMENT DETAILS
Organize with clear subsections:

### Research Question & Hypothesis
- Primary research question
- Main hypothesis tested

### Methodology
- Experimental design approach
- Key techniques and equipment used
- Sample preparation methods

### Test Subjects & Conditions
Create a table format:
| Aspect | Details |
|--------|---------|
| Subjects/Samples | Type and quantity |
| Environment | Microgravity/radiation conditions |
| Duration | Experiment timeline |
| Controls | Control groups used |

### Timeline
- Mission/experiment duration
- Key milestones

---

## KEY FINDINGS
Present as a numbered list with detailed explanations for 5-7 major findings. Each entry must start with a descriptive title in bold.

1. **[Descriptive Finding Title]**: Description of the finding with specific data points where applicable, including statistical significance (p-values, confidence levels) if known.
2. **[Descriptive Finding Title]**: Description of the finding.
(Continue up to 7, if applicable)

Highlight novel discoveries or unexpected results with blockquotes:
> Notable Discovery: [Description]

---

## BIOLOGICAL IMPACTS

### Cellular Level Effects
- Gene expression changes
- Protein synthesis alterations
- Cell signaling modifications

### Physiological Changes
| System | Observed Change | Significance |
|--------|----------------|--------------|
| [System] | [Change] | [Impact] |

### Molecular & Genetic Implications
- DNA/RNA modifications
- Epigenetic changes
- Metabolic pathway effects

### Astronaut Health Implications
- Short-term effects
- Long-term health concerns
- Countermeasure recommendations

---

## KNOWLEDGE GRAPH
**You must output the content for this section as a single JSON code block.** Do NOT use markdown outside of the JSON block. This data will be used to generate a graph.

```json
{{
  "nodes": [
    {{"id": "gene_x", "label": "Gene X (FOXP2)", "type": "Gene"}},
    {{"id": "microg", "label": "Microgravity", "type": "Condition"}},
    {{"id": "iss", "label": "ISS (Habitat)", "type": "Location"}}
  ],
  "edges": [
    {{"source": "microg", "target": "gene_x", "relationship": "CAUSES_UPREGULATION"}},
    {{"source": "gene_x", "target": "iss", "relationship": "OBSERVED_IN"}}
  ],
  "summary": "Brief textual summary of the relationships extracted."
}}
```

---

## PRACTICAL APPLICATIONS

### Space Exploration Applications
1. **Long-Duration Spaceflight**
   - Specific implications
   - Risk mitigation strategies

2. **Mars Mission Relevance**
   - How findings apply to Mars missions
   - Countermeasure development

### Earth-Based Medical Applications
- Clinical applications
- Drug development opportunities
- Diagnostic tool potential

### Technology Development
- New monitoring systems
- Protective equipment
- Treatment protocols

---

## RESEARCH CONNECTIONS

### Related NASA Missions
| Mission/Experiment | Connection | Year |
|--------------------|------------|------|
| [Name] | [How it relates] | [Year] |

### Interdisciplinary Links
- **Medicine**: [Specific connection]
- **Engineering**: [Specific connection]
- **Physics**: [Specific connection]
- **Biology**: [Specific connection]

### Research Timeline
- Previous studies that led here
- Current position in research arc
- Future directions indicated

---

## VISUAL INSIGHTS

Suggest **5 specific, different visualizations** (Graphs & Charts) with details. Each entry must be uniquely numbered 1 through 5.

1. **Chart Name** - Description of what this chart shows.
   - X-axis: [Variable]
   - Y-axis: [Variable]
   - Key comparison: [What to highlight]

---

## FUTURE RESEARCH RECOMMENDATIONS

### Open Questions
1. [Specific question requiring further investigation]
2. [Specific question about mechanisms]

### Suggested Follow-Up Studies
| Study Type | Focus Area | Priority | Resources Needed |
|------------|------------|----------|------------------|
| [Type] | [Area] | High/Medium/Low | [Resources] |

### Research Gaps to Address
- **Gap 1**: [Description and why it matters]
- **Gap 2**: [Description and potential impact]

### Next Steps Roadmap
1. **Immediate** (0-2 years): [Studies]
2. **Near-term** (2-5 years): [Studies]
3. **Long-term** (5+ years): [Studies]

---

**Format Guidelines:**
- Use markdown tables where data comparison is needed
- Use bold (**) for emphasis on critical points
- Use bullet points and numbered lists for clarity
- Add horizontal rules (---) between major sections **BUT DO NOT USE horizontal rules within the section content.**
- **You MUST use the exact main section headings provided (e.g., '## EXECUTIVE SUMMARY') and you MUST ensure some content or a placeholder is present for every section.**""",

    "quick_summary": """Provide a concise 2-3 sentence summary of this NASA bioscience experiment:

Title: {title}
Authors: {authors}

Focus on: What was studied, why it matters for space exploration, and the general research area.""",
}
